"""
Domain exceptions for the reorder engine.

Services raise these; the HTTP layer converts them with ``to_http_exception``
so routers never translate errors themselves. Inside a reorder run, item and
vendor level failures are captured into the run result instead of raised.
"""
from typing import Any, Optional

from fastapi import HTTPException, status


class ReorderEngineException(Exception):
    code = "REORDER_ENGINE_ERROR"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class EntityNotFoundException(ReorderEngineException):
    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(f"{entity} with id {entity_id} not found", {"entity": entity, "id": entity_id})


class BusinessRuleViolationException(ReorderEngineException):
    code = "BUSINESS_RULE_VIOLATION"
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class AuthenticationException(ReorderEngineException):
    code = "UNAUTHORIZED"
    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationException(ReorderEngineException):
    code = "FORBIDDEN"
    status_code = status.HTTP_403_FORBIDDEN


class ConfigurationException(ReorderEngineException):
    code = "CONFIGURATION_ERROR"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class MissingReorderFieldException(ReorderEngineException):
    """A catalog record lacks a field the reorder engine cannot default."""

    code = "MISSING_REORDER_FIELD"
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

    def __init__(self, sku_code: str, field: str):
        super().__init__(f"SKU {sku_code}: {field} is required for reorder", {"sku": sku_code, "field": field})
        self.field = field


class PricingException(ReorderEngineException):
    code = "PRICING_ERROR"
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class PurchaseOrderWriteException(ReorderEngineException):
    code = "PURCHASE_ORDER_WRITE_FAILED"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def to_http_exception(exc: ReorderEngineException) -> HTTPException:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationException) else None
    return HTTPException(
        status_code=exc.status_code,
        detail={"code": exc.code, "message": exc.message},
        headers=headers,
    )
