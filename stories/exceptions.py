"""
Результати-помилки каталогу історій.

Виклики гілкуються по класу (або по ``code``), а не по тексту повідомлення.
"""


class StoryCatalogError(Exception):
    code = "catalog_error"
    default_detail = "Story catalog failure."

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(StoryCatalogError):
    """Виправна помилка вводу; жоден запис ще не відбувся."""
    code = "validation_error"

    def __init__(self, field: str, rule: str, detail: str | None = None):
        self.field = field
        self.rule = rule
        super().__init__(detail or f"{field}: {rule}")


class NotFound(StoryCatalogError):
    code = "not_found"
    default_detail = "Story not found."

    def __init__(self, story_id=None, detail: str | None = None):
        self.story_id = story_id
        super().__init__(detail)


class ConstraintViolation(StoryCatalogError):
    code = "constraint_violation"
    default_detail = "The store rejected the write."


class StoreUnavailable(StoryCatalogError):
    code = "store_unavailable"
    default_detail = "The story store is temporarily unavailable. Please retry."
