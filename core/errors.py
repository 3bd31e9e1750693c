class InvalidIdentifier(ValueError):
    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Invalid lightning address {identifier}")


class MissingCallback(Exception):
    status_code = 400

    def __init__(self, identifier: str, message: str = "LNURL-pay document has no callback"):
        self.identifier = identifier
        super().__init__(f"{message}: {identifier}")


class UpstreamError(Exception):
    """An upstream fetch failed; carries the status code to answer with."""

    def __init__(self, message: str, status_code: int | None = None):
        self.upstream_status = status_code
        # Upstream codes below 300 (decode failures) or missing ones collapse to 400
        self.status_code = status_code if status_code is not None and status_code >= 300 else 400
        super().__init__(message)


class UpstreamUnavailable(UpstreamError):
    pass


class InvoiceFetchFailed(UpstreamError):
    pass


class AllUpstreamsFailed(UpstreamError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message, status_code)
        self.status_code = 400
