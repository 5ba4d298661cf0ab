# -*- coding: utf-8 -*-
"""
Core Module - Settings, configuration, and shared infrastructure.

Contains the settings store and its path resolution, the configuration
dataclass, the background worker pool, and the shell's AppState.

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
