class BinderException(Exception):
    """Base exception for the controller binder."""
    error_code = -1  # Default error code
    message: str

    def __init__(self, message: str | None = None, *args):
        super().__init__(message, *args)
        if message is not None:
            self.message = message
        elif args and args[0]:
            self.message = str(args[0])
        else:
            self.message = self.__class__.__name__

    def __str__(self) -> str:
        return f"{self.error_code} - {self.message}"


class ControllerBindingError(BinderException):
    """Raised when a controller cannot be registered or looked up."""


class NoNameError(ControllerBindingError):
    """Raised when a controller has no usable name and none was provided."""
    error_code = 0


class NameAlreadyBoundError(ControllerBindingError):
    """Raised when a controller name or alias is already registered."""
    error_code = 1


class UnknownControllerError(ControllerBindingError, LookupError):
    """Raised when a controller name or alias is not registered."""
    error_code = 2

    def __init__(self, name: str):
        super().__init__(f"Cannot find the controller with the name {name}")
        self.name = name


class RouterBindingError(BinderException):
    """Raised when a route cannot be bound to the router."""


class InvalidMethodError(RouterBindingError):
    """Raised when the router has no registration function for a method."""
    error_code = 1

    def __init__(self, method: str):
        super().__init__(f"{method} method doesn't exist on router")
        self.method = method


class ControllerNotFoundError(RouterBindingError):
    """Raised when an action string references an unregistered controller."""
    error_code = 2

    def __init__(self, name: str, available: list[str]):
        super().__init__(
            f"Controller with the name {name} was not found. "
            f"Available Names: {','.join(available)}"
        )
        self.name = name
        self.available = available


class ControllerActionNotFoundError(RouterBindingError):
    """Raised when an action is not part of the controller's action table."""
    error_code = 3

    def __init__(self, action_name: str, controller_name: str):
        super().__init__(
            f"Action with the name {action_name} was not found on the controller {controller_name}"
        )
        self.action_name = action_name
        self.controller_name = controller_name


class MiddlewareNotFoundError(RouterBindingError):
    """Raised when attaching middleware that was never registered."""
    error_code = 4

    def __init__(self, name: str, available: list[str]):
        super().__init__(
            f"Middleware with the name {name} was not found. "
            f"Available Names: {','.join(available)}"
        )
        self.name = name
        self.available = available


class RouteNotFoundError(RouterBindingError, LookupError):
    """Raised when no bound route serves the requested action."""
    error_code = 5

    def __init__(self, action: str):
        super().__init__(f"No route is bound to the action {action}")
        self.action = action


class MissingPathParameterError(RouterBindingError, ValueError):
    """Raised when building a URL without one of its path parameters."""
    error_code = 6

    def __init__(self, param_name: str):
        super().__init__(f"Missing required path parameter: {param_name}")
        self.param_name = param_name


class InvalidMiddlewareError(RouterBindingError, TypeError):
    """Raised when something that is not callable ends up in a middleware chain."""
    error_code = 7


class InvalidPathTemplateError(RouterBindingError, ValueError):
    """Raised for URL templates using optional, repeated or pattern-constrained parameters."""
    error_code = 8

    def __init__(self, template: str, param_name: str):
        super().__init__(f"Unsupported modifier after :{param_name} in {template}")
        self.template = template
        self.param_name = param_name


class BinderConfigError(BinderException):
    """Raised when a binder configuration file cannot be loaded or applied."""


class StopChain(Exception):
    """Control signal that ends a middleware chain without an error.

    Raising it from any middleware or action stops the chain; the runner
    swallows it and returns ``result`` as the chain's value. It is the only
    exception the chain runner intercepts.
    """

    def __init__(self, result=None):
        super().__init__(result)
        self.result = result
