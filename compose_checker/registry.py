"""Property auto-discovery and registration.

Scans compose_checker/properties/ for modules that define a `prop` object
of type Property. The registry is keyed by property name and iterates in
reporting order (Property.order), so callers never sort it themselves.

Falls back to a fixed module list when pkgutil.iter_modules finds nothing
(frozen binaries).
"""

import importlib
import pkgutil

from compose_checker.core.types import Property

_registry: dict[str, Property] = {}

_PROPERTY_MODULES = ('monotonic', 'opacity', 'range_closure', 'transparency')


def _module_names() -> list[str]:
    import compose_checker.properties as pkg

    names = [name for _finder, name, _ispkg in pkgutil.iter_modules(pkg.__path__) if not name.startswith('_')]
    return names or list(_PROPERTY_MODULES)


def discover() -> dict[str, Property]:
    """Import the property modules once; return {name: Property} in reporting order."""
    if not _registry:
        found = []
        for name in _module_names():
            prop = getattr(importlib.import_module(f'compose_checker.properties.{name}'), 'prop', None)
            if isinstance(prop, Property):
                found.append(prop)
        _registry.update((p.name, p) for p in sorted(found, key=lambda p: p.order))
    return _registry


def get(name: str) -> Property:
    """Get a property by name."""
    props = discover()
    if name not in props:
        raise KeyError(f'Unknown property: {name}. Available: {", ".join(props)}')
    return props[name]
