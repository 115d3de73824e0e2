"""Requirement classification enums."""

from enum import StrEnum


class RequirementType(StrEnum):
    """Specification level or kind of a requirement."""

    CRS = "CRS"
    PRS = "PRS"
    SRS = "SRS"
    USER_STORY = "UserStory"
    BUSINESS_RULE = "BusinessRule"
    ENTITY_NAME = "EntityName"


class RequirementStatus(StrEnum):
    """Lifecycle status of a requirement."""

    DRAFT = "Draft"
    APPROVED = "Approved"
    IMPLEMENTED = "Implemented"
    VERIFIED = "Verified"


class EntityKind(StrEnum):
    """Versioned entity kinds that can be redlined."""

    REQUIREMENT = "requirement"
    TEST_CASE = "test_case"
