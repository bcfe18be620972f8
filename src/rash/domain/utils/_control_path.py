"""
State-keyed method dispatch (a.k.a. "control-path" templating) via decorators.

This module provides a small mechanism for routing a single method call to one
of several registered implementations based on the value of an attribute of the
receiving object.

Core idea
---------
- You define a *base* method on a class (its signature becomes the canonical one).
- You then register multiple "control paths" for that method, each keyed by:
    (ClassName, MethodName, StateVal)
- At runtime, the wrapper reads the configured state attribute from `self` and
  dispatches to the implementation registered for that value.

In rash this is how backward rules are attached to computation nodes: the
state attribute is the node's ``op`` tag, and every operation module registers
the rule for its own tag.

Important notes
---------------
- The first registration for a method replaces the method on the class with a
  dispatching wrapper. Later registrations only extend the mapping.
- Registered implementations are stored in a closure-local mapping owned by
  one `create_path_builder()` call. Different builders do not share mappings.
- Implementations are called like ordinary instance methods:
  ``impl(self, *args, **kwargs)``.
"""

from typing import (
    Callable,
    Hashable,
    Dict,
    Type,
    Any,
)
from typing_extensions import ParamSpec, TypeVar
from collections import namedtuple
from functools import wraps

P = ParamSpec("P")
R = TypeVar("R")


def create_path_builder(
    state_attr: str,
) -> Callable[
    [Type, Callable[P, R], Hashable],
    Callable[[Callable[P, R]], Callable[P, R]],
]:
    """
    Create and return a "path builder" used to register state-keyed control
    paths for methods.

    The returned function (`templator`) is used like this:

        decorator = create_path_builder("mode")

        class MyClass:
            mode = "A"
            def foo(self, x: int) -> int: ...

        @decorator(MyClass, MyClass.foo, "A")
        def foo_A(self, x: int) -> int:
            ...

        @decorator(MyClass, MyClass.foo, "B")
        def foo_B(self, x: int) -> int:
            ...

    When `MyClass().foo(...)` is called, it dispatches to `foo_A` or `foo_B`
    depending on `self.mode`.

    Parameters
    ----------
    state_attr : str
        Name of the attribute read from `self` to select a control path.

    Returns
    -------
    Callable
        A function with signature:

            (cls, method, state) -> decorator

        where `decorator(sub_method)` registers `sub_method` for that control
        path and installs a dispatcher wrapper on `cls`. The function also
        carries `has_path(cls, method, state)`, which reports whether a path
        is registered without calling it.
    """

    MethodKey = namedtuple(
        "MethodKey",
        [
            "ClassName",
            "MethodName",
            "StateVal",
        ],
    )
    """Tuple-like key used to uniquely identify a control path."""

    methods_map: Dict[MethodKey, Callable] = {}
    """Mapping from (class, method, state) keys to registered implementations."""

    def templator(
        cls: Type,
        method: Callable[P, R],
        state: Hashable,
    ) -> Callable[[Callable[P, R]], Callable[P, R]]:
        """
        Build a decorator that registers a control path implementation.

        Parameters
        ----------
        cls : Type
            The class whose method should be wrapped for state-keyed dispatch.
        method : Callable[P, R]
            The base method being templated. Its name and metadata are reused
            for the installed wrapper via `functools.wraps(method)`.
        state : Hashable
            The state value that selects the decorated implementation.

        Returns
        -------
        Callable[[Callable[P, R]], Callable[P, R]]
            A decorator registering `sub_method` for `(cls, method, state)`.

        Raises
        ------
        TypeError
            If `state` is not hashable.
        """
        try:
            hash(state)
        except TypeError:
            raise TypeError(
                f"The argument for 'state' must be hashable. Got {state!r}"
            ) from None

        # `method` may already be a wrapper installed by an earlier registration
        base = getattr(method, "__wrapped__", method)
        method_name = base.__name__
        smk: MethodKey = MethodKey(cls.__name__, method_name, state)

        def decorator(sub_method: Callable[P, R]) -> Callable[P, R]:
            """
            Register `sub_method` as the implementation for the configured state.

            Parameters
            ----------
            sub_method : Callable[P, R]
                The implementation to run when the state attribute equals
                `state`.

            Returns
            -------
            Callable[P, R]
                The original `sub_method`, unchanged.
            """
            methods_map[smk] = sub_method

            if getattr(getattr(cls, method_name, None), "__control_path__", False):
                return sub_method

            @wraps(base)
            def wrapper(self: Any, *args: P.args, **kwargs: P.kwargs) -> Any:
                """
                Dispatch to a registered implementation based on the state
                attribute of `self`.
                """
                if not hasattr(self, state_attr):
                    raise NotImplementedError(
                        "{} is missing attribute {}".format(
                            type(self), repr(state_attr)
                        )
                    )
                cur = getattr(self, state_attr)
                sm = methods_map.get(MethodKey(cls.__name__, method_name, cur))
                if sm is not None:
                    return sm(self, *args, **kwargs)
                raise NotImplementedError(
                    "Missing control path ({}={}) for {}.{}".format(
                        state_attr, repr(cur), cls.__name__, method_name
                    )
                )

            wrapper.__control_path__ = True  # type: ignore[attr-defined]
            setattr(cls, method_name, wrapper)
            return sub_method

        return decorator

    def has_path(cls: Type, method: Callable, state: Hashable) -> bool:
        """
        Return True if an implementation is registered for `(cls, method, state)`.
        """
        base = getattr(method, "__wrapped__", method)
        return MethodKey(cls.__name__, base.__name__, state) in methods_map

    templator.has_path = has_path  # type: ignore[attr-defined]
    return templator
