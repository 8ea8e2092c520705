"""Exception types raised across stubrecon."""


class StubReconError(Exception):
    """Base class for all stubrecon errors."""


class StartupFailure(StubReconError):
    """The class descriptor source is unavailable or malformed. Aborts the run."""


class DetailParsingError(StubReconError):
    """
    A documentation page has unexpected structure.

    Raised while resolving the members of one class; the compiler skips that
    class and carries on with the rest.
    """

    def __init__(self, document: str, section: str, message: str):
        self.document = document
        self.section = section
        super().__init__(f"Unable to parse {section} detail of document {document}: {message}")


class DocumentLookupError(StubReconError):
    """I/O failure while fetching a documentation page. Treated as no documentation."""

    def __init__(self, class_path: str, message: str):
        self.class_path = class_path
        super().__init__(f"Unable to get documentation page for path {class_path}: {message}")
