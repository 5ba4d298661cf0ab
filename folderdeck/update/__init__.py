# -*- coding: utf-8 -*-
"""
Update Module - Signed application updates.

Contains the manifest parser, signature verifier, bundle installer, and
the updater state machine.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""
