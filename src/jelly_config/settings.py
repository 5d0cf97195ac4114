DEFAULT_MAX_DEPTH = 128


class ParserSettings:
    def __init__(
        self,
        max_depth: int = DEFAULT_MAX_DEPTH,
        allow_trailing_commas: bool = False,
        allow_duplicate_keys: bool = True
    ):
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        self.max_depth = max_depth
        self.allow_trailing_commas = allow_trailing_commas
        self.allow_duplicate_keys = allow_duplicate_keys

    def __repr__(self) -> str:
        return (f"ParserSettings(max_depth={self.max_depth}, "
                f"allow_trailing_commas={self.allow_trailing_commas}, "
                f"allow_duplicate_keys={self.allow_duplicate_keys})")
