import importlib
import logging
import os
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypedDict

import yaml

from binder.exceptions import BinderConfigError

if TYPE_CHECKING:
    from binder.binder import ControllerBinder

logger = logging.getLogger(__name__)

# Default config file name
DEFAULT_CONFIG_FILE = "binder.config.yaml"

ENV_PATTERN = re.compile(r"\$\{([^}]+)\}")


class ControllerConfig(TypedDict, total=False):
    entry: str
    name: str
    alias: str


class RouteConfig(TypedDict, total=False):
    method: str
    url: str
    action: str
    middleware: str | list[str]


class ResourceConfig(TypedDict, total=False):
    base: str
    controller: str


class BinderConfig(TypedDict, total=False):
    controllers: list[ControllerConfig]
    middleware: dict[str, str]
    routes: list[RouteConfig]
    resources: list[ResourceConfig]


def import_from_string(import_str: str) -> Any:
    """Import a class, function, or variable from a module by string.

    Args:
        import_str: String in the format "module.path:symbol". The symbol may be a
            dotted path to a nested attribute.

    Returns:
        The imported object.

    Raises:
        BinderConfigError: If the string is malformed or the import fails.

    Examples:
        ```python
        controller_type = import_from_string("myapp.controllers:UsersController")
        auth = import_from_string("myapp.middleware:require_login")
        ```
    """
    if ":" not in import_str:
        raise BinderConfigError(
            f"Invalid import string format '{import_str}'. Expected 'module.path:symbol'."
        )

    module_path, object_path = import_str.split(":", 1)

    try:
        module = importlib.import_module(module_path)

        target = module
        for part in object_path.split("."):
            target = getattr(target, part)

        return target
    except (ImportError, AttributeError) as e:
        raise BinderConfigError(f"Failed to import '{import_str}': {str(e)}") from e


def load_raw_config(config_path: str | Path) -> dict[str, Any]:
    """
    Load a configuration file.

    Args:
        config_path: Path to the configuration file.

    Returns:
        Dictionary containing the configuration, empty if the file doesn't exist.

    Raises:
        BinderConfigError: If the configuration file could not be loaded.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        return {}

    try:
        with open(config_path) as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise BinderConfigError(
            f"Error loading configuration from {config_path}: {str(e)}"
        ) from e

    if config is None:  # Empty file
        config = {}

    if not isinstance(config, dict):
        raise BinderConfigError(
            f"Invalid configuration format in {config_path}. Expected a dictionary."
        )

    return config


def _substitute_env_vars(config: Any) -> Any:
    """
    Substitute ``${VAR_NAME}`` references in configuration values.

    Raises:
        BinderConfigError: If a referenced environment variable is not set
    """
    def replace_env_var(match: re.Match) -> str:
        env_var = match.group(1)
        env_value = os.getenv(env_var)
        if env_value is None:
            raise BinderConfigError(
                f"Required environment variable '{env_var}' is not set"
            )

        return env_value

    match config:
        case str():
            return ENV_PATTERN.sub(replace_env_var, config)

        case dict():
            return {k: _substitute_env_vars(v) for k, v in config.items()}

        case list():
            return [_substitute_env_vars(item) for item in config]

        case _:
            return config


def validate_config(config: dict[str, Any]) -> None:
    """
    Check the shape of a binder configuration.

    Raises:
        BinderConfigError: If a section or entry is malformed
    """
    for section, expected in (
        ("controllers", list),
        ("middleware", dict),
        ("routes", list),
        ("resources", list),
    ):
        if section in config and not isinstance(config[section], expected):
            raise BinderConfigError(
                f"The '{section}' section must be a {expected.__name__}"
            )

    for i, controller in enumerate(config.get("controllers", [])):
        if not isinstance(controller, dict) or "entry" not in controller:
            raise BinderConfigError(f"Controller {i} missing required 'entry' field")

    for i, route in enumerate(config.get("routes", [])):
        if not isinstance(route, dict):
            raise BinderConfigError(f"Route {i} must be a dictionary")

        missing = [key for key in ("method", "url", "action") if key not in route]
        if missing:
            raise BinderConfigError(
                f"Route {i} missing required field(s): {', '.join(missing)}"
            )

    for i, resource in enumerate(config.get("resources", [])):
        if not isinstance(resource, dict) or not {"base", "controller"} <= resource.keys():
            raise BinderConfigError(
                f"Resource {i} requires both 'base' and 'controller' fields"
            )


def load_binder_config(config_path: str | Path = DEFAULT_CONFIG_FILE) -> BinderConfig:
    """
    Load, substitute environment variables in, and validate a binder config file.

    Raises:
        BinderConfigError: If the configuration is invalid
    """
    config = _substitute_env_vars(load_raw_config(config_path))
    validate_config(config)
    return config


def configure_binder(binder: "ControllerBinder", config: BinderConfig) -> "ControllerBinder":
    """
    Apply a loaded configuration to a binder.

    Sections are applied in dependency order: controllers, middleware, routes,
    then resources. Binding errors raised by the binder propagate unchanged.

    Examples:
        ```yaml
        controllers:
          - entry: "myapp.controllers:UsersController"
            alias: users
        middleware:
          auth: "myapp.middleware:require_login"
        routes:
          - method: get
            url: /users/:id
            action: UsersController.show
            middleware: [auth]
        resources:
          - base: /posts
            controller: PostsController
        ```
    """
    for controller in config.get("controllers", []):
        binder.register(
            import_from_string(controller["entry"]),
            name=controller.get("name"),
            alias=controller.get("alias"),
        )

    for name, entry in config.get("middleware", {}).items():
        binder.register_middleware(name, import_from_string(entry))

    for route in config.get("routes", []):
        action = route["action"]
        # "module:function" names a plain handler instead of a controller action
        if ":" in action:
            action = import_from_string(action)

        handle = binder.add_route(route["method"], route["url"], action)
        if handle is not None and route.get("middleware"):
            handle.middleware(route["middleware"])

    for resource in config.get("resources", []):
        binder.resource(resource["base"], resource["controller"])

    logger.info(
        f"Configured binder with {len(binder.controllers)} controllers "
        f"and {len(binder.list_routes())} routes"
    )
    return binder
