from boottasks.testing._env import temp_env_vars

__all__ = [
    "temp_env_vars",
]
