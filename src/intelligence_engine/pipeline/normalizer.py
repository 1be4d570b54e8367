"""
Input normalization.

Turns whatever the caller hands in (a CustomerData instance or a plain
mapping, camelCase or snake_case) into a fresh, fully-defaulted
CustomerData. The caller's object is never mutated.
"""

import copy
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..errors import InputValidationError
from ..models.customer import CustomerData


def normalize_customer_data(data: CustomerData | Mapping[str, Any]) -> CustomerData:
    """
    Validate and default an incoming customer-data record.

    Args:
        data: CustomerData instance or mapping with the same shape

    Returns:
        A new CustomerData whose collections are all present (possibly empty)

    Raises:
        InputValidationError: company_name is missing/blank or a field has
            the wrong type
    """
    if isinstance(data, CustomerData):
        payload: Any = data.model_dump()
    elif isinstance(data, Mapping):
        payload = copy.deepcopy(dict(data))
    else:
        raise InputValidationError(
            'Customer data must be a CustomerData or a mapping',
            context={'received_type': type(data).__name__},
        )

    try:
        normalized = CustomerData.model_validate(payload)
    except PydanticValidationError as e:
        raise InputValidationError(
            'Invalid customer data',
            context={'errors': [err['msg'] for err in e.errors()]},
        ) from e

    if not normalized.company_name.strip():
        raise InputValidationError('company_name must not be blank')

    return normalized
