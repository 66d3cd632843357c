import importlib
import os
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING  # noqa:F401
from typing import Set
from typing import Union

from packaging.specifiers import InvalidSpecifier
from packaging.specifiers import SpecifierSet
from packaging.version import InvalidVersion
from packaging.version import Version
from wrapt.importer import when_imported

from .internal.logger import get_logger
from .internal.utils import formats
from .settings._config import config


if TYPE_CHECKING:  # pragma: no cover
    from typing import Any  # noqa:F401
    from typing import Callable  # noqa:F401


log = get_logger(__name__)

# Default set of modules to automatically patch or not
PATCH_MODULES = {
    "mongodb": True,
}

_PATCHED_MODULES = set()

# Module names that need to be patched for a given integration. If the module
# name coincides with the integration name, then there is no need to add an
# entry here.
_MODULES_FOR_CONTRIB = {}  # type: dict


class PatchException(Exception):
    """Wraps regular `Exception` class when patching modules"""

    pass


class ModuleNotFoundException(PatchException):
    pass


class IncompatibleModuleException(PatchException):
    def __init__(self, message: str, installed_version: Union[str, None] = None):
        super().__init__(message)
        self.installed_version = installed_version


def is_version_compatible(version: str, supported_versions_spec: str) -> bool:
    "Returns whether a given package version is compatible with the integration's supported version range."

    if not supported_versions_spec:
        return False

    if supported_versions_spec == "*":
        return True

    try:
        return Version(version) in SpecifierSet(supported_versions_spec)
    except (InvalidSpecifier, InvalidVersion):
        return False


def _get_integration_supported_versions(
    integration_patch_module: ModuleType, integration_name: str, hooked_module_name: str
) -> Union[str, None]:
    "Returns the supported version range for an integration."
    if not hasattr(integration_patch_module, "_supported_versions"):
        return None

    supported_versions = integration_patch_module._supported_versions()
    if hooked_module_name in supported_versions:
        return supported_versions[hooked_module_name]
    return supported_versions.get(integration_name)


def check_module_compatibility(
    integration_patch_module: ModuleType, integration_name: str, hooked_module: ModuleType
) -> None:
    "Raises ``IncompatibleModuleException`` when the installed driver is outside the integration's supported range."

    # a module without version information is always patched
    installed_version = integration_patch_module.get_version(hooked_module)
    if not installed_version:
        return

    supported_version_spec = _get_integration_supported_versions(
        integration_patch_module, integration_name, hooked_module.__name__
    )
    if not supported_version_spec:
        return

    if not is_version_compatible(installed_version, supported_version_spec):
        message = (
            f"Skipped patching '{integration_name}' integration, installed version: {installed_version} "
            f"is not compatible with integration support spec: {supported_version_spec}."
        )
        raise IncompatibleModuleException(message, installed_version=installed_version)


def _on_import_factory(module, path_f, raise_errors=True):
    # type: (str, str, bool) -> Callable[[Any], None]
    """Factory to create an import hook for the provided module name"""

    def on_import(hook):
        # Import and patch module
        try:
            imported_module = importlib.import_module(path_f % (module,))

            # if safe instrumentation is enabled, we check if the module's version
            # is compatible with the integration's supported version range, and throw an error if it is not
            if config._trace_safe_instrumentation_enabled:
                check_module_compatibility(imported_module, module, hook)

            imported_module.patch(hook)
        except IncompatibleModuleException as e:
            log.error("failed to enable mongotrace support for %s: %s", module, str(e))
        except Exception as e:
            if raise_errors:
                raise
            log.error("failed to enable mongotrace support for %s: %s", module, str(e))

    return on_import


def patch_all(**patch_modules: bool) -> None:
    """Enables mongotrace library instrumentation.

    In addition to ``patch_modules``, an override can be specified via an
    environment variable, ``MONGOTRACE_TRACE_<module>_ENABLED`` for each module.

    ``patch_modules`` have the highest precedence for overriding.

    :param dict patch_modules: Override whether particular modules are patched or not.

        >>> patch_all(mongodb=False)
    """
    modules = PATCH_MODULES.copy()

    # The enabled setting can be overridden by environment variables
    for module in modules:
        env_var = "MONGOTRACE_TRACE_%s_ENABLED" % module.upper()
        if env_var in os.environ:
            modules[module] = formats.asbool(os.environ[env_var])

    # Arguments take precedence over the environment and the defaults.
    modules.update(patch_modules)

    patch(raise_errors=False, **modules)


def patch(raise_errors=True, **patch_modules):
    # type: (bool, bool) -> None
    """Patch only a set of given modules.

    :param bool raise_errors: Raise error if one patch fail.
    :param dict patch_modules: List of modules to patch.

        >>> patch(mongodb=True)
    """
    contribs = [c for c, enabled in patch_modules.items() if enabled]
    for contrib in contribs:
        # Check if we have the requested contrib.
        if not (Path(__file__).parent / "contrib" / contrib / "patch.py").exists():
            if raise_errors:
                raise ModuleNotFoundException(f"{contrib} does not have automatic instrumentation")
            log.error("%s does not have automatic instrumentation", contrib)
            continue
        modules_to_patch = _MODULES_FOR_CONTRIB.get(contrib, (contrib,))
        for module in modules_to_patch:
            # Use factory to create handler to close over `module` and `raise_errors` values from this loop
            when_imported(module)(_on_import_factory(contrib, "mongotrace.contrib.%s.patch", raise_errors=raise_errors))

        # manually add module to patched modules
        _PATCHED_MODULES.add(contrib)

    log.info(
        "Configured mongotrace instrumentation for %s integration(s). The following modules have been patched: %s",
        len(contribs),
        ",".join(contribs),
    )


def _get_patched_modules() -> Set[str]:
    """Get the list of patched modules"""
    return _PATCHED_MODULES
