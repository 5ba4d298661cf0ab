# -*- coding: utf-8 -*-
"""
Catalog Module - Scanning, ordering, and creating catalog items.

Contains the filesystem scanner, the catalog manager that keeps the
ordered catalog current, name sanitization, and the folder creator with
its scaffold registry.

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
