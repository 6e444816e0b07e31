class LoadError(RuntimeError):
    """
    Raised when an input file cannot be opened or parsed.

    The map cannot be drawn without both datasets, so this is fatal at startup.
    """

    def __init__(self, path, message):
        super().__init__(f"{path}: {message}")
        self.path = str(path)
