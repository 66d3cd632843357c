import os
import typing as t


def get_config(
    envs: t.Union[str, t.List[str]],
    default: t.Any = None,
    modifier: t.Optional[t.Callable[[t.Any], t.Any]] = None,
) -> t.Any:
    """Retrieve a configuration value from the environment.

    The first environment variable of ``envs`` that is set wins. ``modifier``
    is applied to the raw string value; the default is returned untouched.
    """
    if isinstance(envs, str):
        envs = [envs]

    for env in envs:
        if env in os.environ:
            val = os.environ[env]
            if modifier:
                val = modifier(val)
            return val
    return default
