"""Shared types for the svloader package."""

from typing import Any

Row = list[str]
Batch = list[Row]
Params = tuple | list | dict
Record = dict[str, Any]
