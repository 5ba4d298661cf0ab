# -*- coding: utf-8 -*-
"""
Scaffold Registry - Starter files written into new catalog items.

Item types are declared in YAML. The bundled ``scaffolds.yaml`` ships
the built-in types; a user file at ``~/.folderdeck/scaffolds.yaml`` may
add types or replace built-in ones by name.

YAML layout::

    version: 1
    types:
      python:
        description: Python script project
        files:
          README.md: |
            # {name}

Dependencies
------------
pyyaml

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

# Standard library
import logging
from pathlib import Path, PurePosixPath
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

# Third-party
import yaml

# FolderDeck internal
from folderdeck.core.resolver import resolve_user_scaffolds_path


BUNDLED_SCAFFOLDS = Path(__file__).with_name("scaffolds.yaml")


class Scaffold:
    """A named set of template files.

    Parameters
    ----------
    item_type : str
        Type tag, e.g. ``'python'``.
    files : Dict[str, str]
        Relative POSIX path to template text.
    description : str
        Human-readable description for the UI.
    """

    def __init__(
        self,
        item_type: str,
        files: Dict[str, str],
        description: str = "",
    ) -> None:
        for rel in files:
            _check_relative(rel)
        self.item_type = item_type
        self.files = dict(files)
        self.description = description

    def render(self, name: str, slug: str) -> Dict[str, str]:
        """Substitute ``{name}`` and ``{slug}`` in every template."""
        return {
            rel: text.replace("{name}", name).replace("{slug}", slug)
            for rel, text in self.files.items()
        }

    def __repr__(self) -> str:
        return f"Scaffold({self.item_type!r}, files={sorted(self.files)!r})"


def _check_relative(rel: str) -> None:
    path = PurePosixPath(rel)
    if not rel or path.is_absolute() or '..' in path.parts or '\\' in rel:
        raise ValueError(f"Scaffold file path must be relative: {rel!r}")


def parse_scaffolds(data: object) -> Dict[str, Scaffold]:
    """Build scaffolds from a parsed YAML document.

    Malformed types are logged and skipped.

    Parameters
    ----------
    data : object
        Result of ``yaml.safe_load``.

    Returns
    -------
    Dict[str, Scaffold]
    """
    if not isinstance(data, dict):
        raise ValueError("Scaffold document must be a mapping")

    types = data.get('types') or {}
    if not isinstance(types, dict):
        raise ValueError("'types' must be a mapping")

    scaffolds: Dict[str, Scaffold] = {}
    for item_type, definition in types.items():
        definition = definition or {}
        files = definition.get('files') or {}
        try:
            if not isinstance(files, dict):
                raise ValueError("'files' must be a mapping")
            scaffolds[str(item_type)] = Scaffold(
                str(item_type),
                {str(k): '' if v is None else str(v) for k, v in files.items()},
                description=str(definition.get('description', '')),
            )
        except ValueError as e:
            logger.warning("Skipping scaffold type %r: %s", item_type, e)
    return scaffolds


def load_scaffolds(
    path: Optional[Path] = None,
    user_path: Optional[Path] = None,
) -> Dict[str, Scaffold]:
    """Load the bundled scaffolds merged with the user's.

    Parameters
    ----------
    path : Optional[Path]
        Bundled scaffold file. Defaults to the packaged
        ``scaffolds.yaml``.
    user_path : Optional[Path]
        User scaffold file. Defaults to
        ``~/.folderdeck/scaffolds.yaml``. A missing or unreadable user
        file is ignored.

    Returns
    -------
    Dict[str, Scaffold]
        Mapping of item type to scaffold.
    """
    path = path or BUNDLED_SCAFFOLDS
    with open(path, 'r', encoding='utf-8') as f:
        scaffolds = parse_scaffolds(yaml.safe_load(f))

    user_path = user_path or resolve_user_scaffolds_path()
    if user_path.exists():
        try:
            with open(user_path, 'r', encoding='utf-8') as f:
                scaffolds.update(parse_scaffolds(yaml.safe_load(f)))
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.warning(
                "Ignoring user scaffolds at %s: %s", user_path, e
            )

    return scaffolds
