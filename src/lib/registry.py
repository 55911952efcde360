"""
Module and type-name registries

Both tables are filled by the directive interpreter. Insertion is a hard
uniqueness check in both: a repeated key is rejected, the first entry wins.
"""

from typing import Dict, Iterator, Optional

from ..models.shader import ModuleKind, ShaderModule


class ModuleRegistry:
    """
    Name -> ShaderModule table of finalized modules

    Consulted only by #include_module and #program lookups within the same
    parse; never exported.
    """

    def __init__(self) -> None:
        self.modules: Dict[str, ShaderModule] = {}

    def insert(self, module: ShaderModule) -> bool:
        """
        Register a finalized module

        Args:
            module: Module to register

        Returns:
            True if inserted, False if the name was already taken (the
            existing module is kept)
        """
        if module.name in self.modules:
            return False
        self.modules[module.name] = module
        return True

    def get(self, name: str) -> Optional[ShaderModule]:
        """Module by name, or None if no such module was finalized"""
        return self.modules.get(name)

    def get_ofKind(self, name: str, kind: ModuleKind) -> Optional[ShaderModule]:
        """Module by name only if it also has the given kind"""
        module = self.modules.get(name)
        if module is None or module.kind is not kind:
            return None
        return module

    def __contains__(self, name: str) -> bool:
        return name in self.modules

    def __len__(self) -> int:
        return len(self.modules)

    def __iter__(self) -> Iterator[ShaderModule]:
        return iter(self.modules.values())


class TypeRegistry:
    """
    GLSL type name -> host type name table filled by #ctypedef

    The only registry exported wholesale into the parse result.
    """

    def __init__(self) -> None:
        self.mapping: Dict[str, str] = {}

    def insert(self, glsl_type: str, host_type: str) -> bool:
        """
        Register a type-name mapping

        Returns:
            True if inserted, False if `glsl_type` was already mapped
        """
        if glsl_type in self.mapping:
            return False
        self.mapping[glsl_type] = host_type
        return True

    def get(self, glsl_type: str) -> Optional[str]:
        return self.mapping.get(glsl_type)

    def export(self) -> Dict[str, str]:
        """Copy of the mapping, independent of this registry"""
        return dict(self.mapping)

    def __len__(self) -> int:
        return len(self.mapping)
