"""
Form input models.

Pydantic models validating what the customer edit forms submit before it
reaches the domain. Field names accept both snake_case and the camelCase keys
used by the browser forms.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from domain.customer import Customer, CustomerStatus
from domain.scoring_rules import Budget, CompanySize, Industry, Timeline


class AttributeUpdate(BaseModel):
    """Partial update submitted by the edit/scoring form. Unset fields are left alone."""

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        str_strip_whitespace=True,
        use_enum_values=True,
        json_schema_extra={
            "example": {
                "companySize": "large",
                "budget": "high",
                "timeline": "short",
                "industry": "technology",
            }
        },
    )

    name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = Field(None, min_length=1)
    company: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = None
    source: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[CustomerStatus] = None

    company_size: Optional[CompanySize] = Field(None, alias="companySize")
    budget: Optional[Budget] = None
    timeline: Optional[Timeline] = None
    industry: Optional[Industry] = None

    def changes(self) -> Dict[str, Any]:
        """Fields the form actually set, keyed by Customer attribute name."""

        return self.model_dump(exclude_unset=True, exclude_none=True)


class NewCustomerForm(BaseModel):
    """Add-customer form. Name, email and company are required."""

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        str_strip_whitespace=True,
        use_enum_values=True,
        json_schema_extra={
            "example": {
                "name": "Sarah Chen",
                "email": "sarah.chen@techcorp.com",
                "company": "TechCorp Solutions",
                "status": "lead",
            }
        },
    )

    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)
    phone: Optional[str] = None
    source: Optional[str] = None
    notes: str = ""
    status: CustomerStatus = CustomerStatus.LEAD

    company_size: CompanySize = Field(CompanySize.SMALL, alias="companySize")
    budget: Budget = Budget.UNKNOWN
    timeline: Timeline = Timeline.MEDIUM
    industry: Industry = Industry.OTHER

    def to_customer(self, now: datetime) -> Customer:
        profile = self.model_dump(exclude={"name", "email", "company"})
        return Customer.create(self.name, self.email, self.company, now=now, **profile)


__all__ = ["AttributeUpdate", "NewCustomerForm"]
