"""Exception types raised outside the pure extraction pipeline."""


class VatLedgerError(Exception):
    """Base class for vatledger failures."""


class RecognitionError(VatLedgerError):
    """The OCR engine is unavailable or could not read an image."""
