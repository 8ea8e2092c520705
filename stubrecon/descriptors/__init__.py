"""Class descriptor sources (reflective member data of exposed classes)."""

from .provider import DescriptorProvider, StaticDescriptorProvider, JsonDescriptorProvider

__all__ = ["DescriptorProvider", "StaticDescriptorProvider", "JsonDescriptorProvider"]
