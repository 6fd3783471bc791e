# 📄 File: plantpal/shared/core/schemas.py
# 🧭 Purpose (Layman Explanation):
# The common shape of every answer PlantPal sends back, so the app always
# speaks camelCase JSON and always says whether things went well.
# 🧪 Purpose (Technical Summary):
# Pydantic base classes for API schemas: camelCase aliasing with snake_case
# population, and the {"success": true, ...} response envelope.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# Every module's presentation/api/schemas package

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Schema base: camelCase on the wire, snake_case in Python, either accepted on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SuccessResponse(CamelModel):
    success: bool = True


class MessageResponse(SuccessResponse):
    message: str
