class PatchFileError(Exception):
    """Raised when a file to patch cannot be read or written.

    The message carries the failing step (``read file`` or ``write file``),
    the original ``OSError`` is chained as ``__cause__``.
    """

    def __init__(self, step: str, path, cause: Exception):
        super().__init__(f"{step}: {cause}")
        self.step = step
        self.path = path
