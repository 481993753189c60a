"""例外型別 — 只有「中止產生」等級的錯誤才會拋出."""


class TokensheetError(Exception):
    """所有 tokensheet 例外的基底."""


class TokenError(TokensheetError, ValueError):
    """Token JSON 格式錯誤或 mode 變數不一致."""


class GroupingError(TokensheetError):
    """同一群組的 token 指向不同的 component / component set."""


class ShorthandError(TokensheetError, ValueError):
    """CSS shorthand 的值數量不是 1~4 個."""


class BoxModelConflictError(TokensheetError):
    """尺寸補償需要設定 position/left/top，但 instance 已經有這些屬性."""


class UnsupportedDialectError(TokensheetError, ValueError):
    """要求了不支援的輸出格式."""


class UnknownBoxModelError(TokensheetError, ValueError):
    """boxModel 不是 full / padding / split / off 其中之一."""
