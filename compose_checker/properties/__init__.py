"""Universal properties of the composition kernel, one module per property.

Each module defines a `prop` object (compose_checker.core.types.Property);
compose_checker.registry.discover() collects them. Modules whose names start
with an underscore hold shared helpers and are skipped.
"""

# Frozen builds: pkgutil cannot list this package, so import explicitly
import compose_checker.properties.monotonic as _monotonic  # noqa: F401
import compose_checker.properties.opacity as _opacity  # noqa: F401
import compose_checker.properties.range_closure as _range_closure  # noqa: F401
import compose_checker.properties.transparency as _transparency  # noqa: F401
