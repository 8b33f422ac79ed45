from typing import Any, Dict, Optional


class Environment:
    """One scope in a chain of scopes mapping identifiers to runtime values.

    Lookups that fall off the outermost scope yield None rather than an
    error; the language treats unresolved names as null.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}

    def get(self, name: str) -> Any:
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return env.values[name]
            env = env.parent
        return None

    def set(self, name: str, value: Any) -> None:
        # Always binds in this scope; outer bindings are only shadowed.
        self.values[name] = value

    def child_scope(self) -> 'Environment':
        return Environment(parent=self)

    def __contains__(self, name: str) -> bool:
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return True
            env = env.parent
        return False

    def __repr__(self) -> str:
        depth = 0
        env = self.parent
        while env is not None:
            depth += 1
            env = env.parent
        return f"<Environment depth={depth} names={sorted(self.values)}>"
