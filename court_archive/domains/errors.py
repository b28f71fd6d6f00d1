import uuid


class DuplicateLabelError(ValueError):
    """Метка уже занята в пределах родителя"""


class UnknownLocationError(LookupError):
    """Родительская сущность не найдена при создании дочерней"""

    def __init__(self, kind: str, entity_id: uuid.UUID):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind.capitalize()} {entity_id} not found")


class UserHasDocumentsError(ValueError):
    """Удаление пользователя, за которым числятся документы"""

    def __init__(self, user_id: uuid.UUID, document_count: int):
        self.user_id = user_id
        self.document_count = document_count
        super().__init__(
            f"User {user_id} created {document_count} document(s) and cannot be deleted; deactivate instead"
        )


class InvalidStatusTransitionError(ValueError):
    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Status cannot change from '{current}' to '{requested}'")


class CorruptedReferenceError(RuntimeError):
    """Документ ссылается на несуществующего предка или автора"""

    def __init__(self, document_id: uuid.UUID, kind: str, missing_id: uuid.UUID):
        self.document_id = document_id
        self.kind = kind
        self.missing_id = missing_id
        super().__init__(f"Document {document_id} references missing {kind} {missing_id}")
