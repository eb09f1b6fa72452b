from binder.binder import ControllerBinder, create_controller_binder, get_current_binder
from binder.config import configure_binder, load_binder_config
from binder.controllers import ControllerBinding
from binder.exceptions import (
    BinderConfigError,
    BinderException,
    ControllerActionNotFoundError,
    ControllerBindingError,
    ControllerNotFoundError,
    InvalidMethodError,
    InvalidMiddlewareError,
    InvalidPathTemplateError,
    MiddlewareNotFoundError,
    MissingPathParameterError,
    NameAlreadyBoundError,
    NoNameError,
    RouteNotFoundError,
    RouterBindingError,
    StopChain,
    UnknownControllerError,
)
from binder.protocols import RouterProtocol

__all__ = [
    "BinderConfigError",
    "BinderException",
    "ControllerActionNotFoundError",
    "ControllerBinder",
    "ControllerBinding",
    "ControllerBindingError",
    "ControllerNotFoundError",
    "InvalidMethodError",
    "InvalidMiddlewareError",
    "InvalidPathTemplateError",
    "MiddlewareNotFoundError",
    "MissingPathParameterError",
    "NameAlreadyBoundError",
    "NoNameError",
    "RouteNotFoundError",
    "RouterBindingError",
    "RouterProtocol",
    "StopChain",
    "UnknownControllerError",
    "configure_binder",
    "create_controller_binder",
    "get_current_binder",
    "load_binder_config",
]
__version__ = "0.1.0"
