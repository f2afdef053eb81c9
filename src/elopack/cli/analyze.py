"""``--analyze``: print the wire layout of message classes in a Python file."""

from __future__ import annotations

import importlib.util
import logging
import sys
from pathlib import Path
from typing import List, Type

from ..codec.schema import Schema
from ..models.base import BaseMessage

logger = logging.getLogger(__name__)


def load_message_classes(file_path: Path) -> List[Type[BaseMessage]]:
    """Import a Python file and return the BaseMessage classes it defines.

    Classes the file merely imports are skipped. The module stays registered
    in ``sys.modules`` so pydantic can resolve forward references later.

    Raises:
        ImportError: If the file cannot be loaded as a module
    """
    module_name = f"_elopack_analyze_{file_path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, file_path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Could not load module from {file_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)

    return [
        obj
        for obj in vars(module).values()
        if isinstance(obj, type)
        and issubclass(obj, BaseMessage)
        and obj is not BaseMessage
        and obj.__module__ == module_name
    ]


def analyze_file(file_path: Path) -> None:
    """Print the wire layout of every message class defined in a file.

    Args:
        file_path: Path to Python file containing message definitions
    """
    message_classes = load_message_classes(file_path)
    logger.debug("Found %d message classes in %s", len(message_classes), file_path)

    if not message_classes:
        print(f"No BaseMessage classes found in {file_path}")
        return

    count = len(message_classes)
    print("|" * 7, "elopack: Schema-driven Binary Codec", "|" * 7)
    print(f"{count} message{'s' if count != 1 else ''} loaded.")
    print("Field sizes are in bytes; * marks a variable-length field.")
    print()

    for msg_class in message_classes:
        analyze_message_class(msg_class)


def analyze_message_class(msg_class: type[BaseMessage]) -> None:
    """Print the wire layout of a single message class.

    Args:
        msg_class: Message class to analyze
    """
    schema = msg_class.elo_schema()
    payload = schema.fixed_size()

    print(f"{'=' * 19} {msg_class.__name__} {'=' * 19}")
    if payload is None:
        print("Variable-length package")
    else:
        print(f"Fixed package size: {payload + 1} bytes ({payload} payload + 1 check byte)")
    if msg_class.elo_max_bytes is not None:
        print(f"Allowed maximum size of package: {msg_class.elo_max_bytes} bytes")
    print()

    _print_schema(schema, indent=8)
    print(f"        check byte{'.' * 38}1")
    print()


def _print_schema(schema: Schema, indent: int) -> None:
    pad = " " * indent
    for i, field in enumerate(schema, 1):
        field_desc = f"{i}. {field.name} ({field.describe()})"
        size = field.fixed_size()
        size_text = "*" if size is None else str(size)
        dots = "." * max(1, 54 - len(field_desc) - len(size_text))
        print(f"{pad}{field_desc}{dots}{size_text}")
        if field.schema is not None:
            _print_schema(field.schema, indent + 4)
