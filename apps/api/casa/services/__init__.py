"""Service layer modules."""

from casa.services import (
    casa_case_service,
    contact_type_service,
    emancipation_service,
)

__all__ = ["casa_case_service", "contact_type_service", "emancipation_service"]
