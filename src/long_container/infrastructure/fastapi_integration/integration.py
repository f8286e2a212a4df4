from typing import Any, Awaitable, Callable, Optional

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from long_container.domain import IContainer, Identifier, Parameters


def create_fastapi_dependency(
    container: IContainer,
    identifier: Identifier,
    parameters: Optional[Parameters] = None,
) -> Callable[[], Any]:
    """Create a FastAPI Depends() callable that resolves from the container.

    Shared values, factories and raw entries behave exactly as with
    ``container.make``.

    Args:
        container: The container to resolve from.
        identifier: The identifier or class to resolve when the dependency is called.
        parameters: Explicit constructor arguments passed to ``make``.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> container = Container()
        >>> container.set("users", UserRepository)
        >>>
        >>> get_user_repo = create_fastapi_dependency(container, "users")
        >>>
        >>> @app.get("/users")
        >>> async def list_users(repo: UserRepository = Depends(get_user_repo)):
        ...     return await repo.get_all()
    """

    def dependency() -> Any:
        """Resolve the dependency from the container."""
        return container.make(identifier, parameters)

    return dependency


def create_request_dependency(identifier: Identifier) -> Callable[[Request], Any]:
    """Create a FastAPI dependency resolving from the container attached to the request.

    Requires the ContainerMiddleware to be installed.

    Args:
        identifier: The identifier or class to resolve.

    Returns:
        A callable that resolves from ``request.state.container``.

    Example:
        >>> app.add_middleware(ContainerMiddleware, container=container)
        >>>
        >>> get_settings = create_request_dependency("settings")
        >>>
        >>> @app.get("/settings")
        >>> async def show(settings: Settings = Depends(get_settings)):
        ...     return settings.public()
    """

    def request_dependency(request: Request) -> Any:
        """Resolve from the request's container."""
        container = getattr(request.state, "container", None)
        if container is None:
            raise RuntimeError("Request does not carry a container. Did you forget to add ContainerMiddleware?")
        return container.make(identifier)

    return request_dependency


class ContainerMiddleware(BaseHTTPMiddleware):
    """Middleware attaching a container to every request.

    Endpoints and dependencies receive the container through
    ``request.state.container`` rather than a global.

    Attributes:
        container: The container handed to each request.

    Example:
        >>> app = FastAPI()
        >>> app.add_middleware(ContainerMiddleware, container=container)
    """

    def __init__(self, app: FastAPI, container: IContainer):
        """Initialize the middleware with the container to attach.

        Args:
            app: The FastAPI/Starlette application.
            container: The container to attach to requests.
        """
        super().__init__(app)
        self.container = container

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        """Attach the container to the request and execute the endpoint.

        Args:
            request: The incoming HTTP request.
            call_next: The next middleware or endpoint handler.

        Returns:
            The response from the endpoint.
        """
        request.state.container = self.container
        return await call_next(request)


def inject_dependencies(container: IContainer, **identifiers: Identifier) -> Callable:
    """Decorator filling keyword arguments of an async endpoint from the container.

    Arguments the caller already supplied are left untouched.

    Args:
        container: The container to resolve from.
        **identifiers: Parameter name to identifier or class.

    Returns:
        A decorator function.

    Example:
        >>> @app.get("/users")
        >>> @inject_dependencies(container, users=UserService, log="logger")
        >>> async def list_users(users: UserService, log: Logger):
        ...     log.info("Listing users")
        ...     return await users.get_all()
    """

    def decorator(func: Callable) -> Callable:
        """Wrap the function with dependency injection logic."""

        async def wrapper(*args, **kwargs):
            """Resolve missing dependencies and call the original function."""
            for param_name, identifier in identifiers.items():
                if param_name not in kwargs:
                    kwargs[param_name] = container.make(identifier)

            return await func(*args, **kwargs)

        return wrapper

    return decorator
