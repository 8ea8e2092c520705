"""
Class descriptor sources.

A descriptor source supplies the reflective member data of every class the
scripting runtime exposes. Discovering that set needs the host runtime itself,
so the compiler only sees this interface: the dump is produced elsewhere and
loaded here.
"""

import json
from pathlib import Path
from typing import Iterable, List, Protocol, runtime_checkable
import logging

from pydantic import TypeAdapter, ValidationError

from stubrecon.errors import StartupFailure
from stubrecon.schemas import ReflectedClass

logger = logging.getLogger(__name__)

REFLECTED_CLASSES = TypeAdapter(List[ReflectedClass])


@runtime_checkable
class DescriptorProvider(Protocol):
    def load_classes(self) -> List[ReflectedClass]:
        """
        Return the reflective descriptors of all exposed classes.

        Raises:
            StartupFailure: If the source is unavailable or malformed
        """
        ...


class StaticDescriptorProvider:
    """Provider over an in-memory collection of descriptors."""

    def __init__(self, classes: Iterable[ReflectedClass]):
        self.classes = list(classes)

    def load_classes(self) -> List[ReflectedClass]:
        return list(self.classes)


class JsonDescriptorProvider:
    """
    Load reflective class descriptors from a JSON dump.

    Accepts either ``{"classes": [...]}`` or a bare list of class objects.
    """

    def __init__(self, path: Path):
        """
        Initialize the provider.

        Args:
            path: Path to the descriptor dump
        """
        self.path = Path(path)

    def load_classes(self) -> List[ReflectedClass]:
        logger.debug(f"Reading exposed classes from {self.path}")
        try:
            data = json.loads(self.path.read_text(encoding='utf-8'))
        except OSError as e:
            raise StartupFailure(f"Unable to read class descriptors from {self.path}: {e}") from e
        except ValueError as e:
            raise StartupFailure(f"Invalid JSON in class descriptor file {self.path}: {e}") from e

        if isinstance(data, dict):
            data = data.get("classes")

        if not isinstance(data, list):
            raise StartupFailure(f"Class descriptor file {self.path} has no class list")

        try:
            classes = REFLECTED_CLASSES.validate_python(data)
        except ValidationError as e:
            raise StartupFailure(f"Malformed class descriptors in {self.path}: {e}") from e

        logger.info(f"Loaded {len(classes)} exposed classes from {self.path}")
        return classes
