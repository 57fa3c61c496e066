class ChangeSetError(Exception):
    pass


class DuplicateChangeError(ChangeSetError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Already added changes for '{path}', shouldn't add a 2nd time.")


class UnknownPathError(ChangeSetError, LookupError):
    def __init__(self, path: str, what: str = "file changes"):
        self.path = path
        super().__init__(f"No {what} found for '{path}'.")


class ChangeSetFormatError(ChangeSetError):
    pass
