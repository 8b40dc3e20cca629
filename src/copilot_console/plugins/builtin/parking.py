"""
Conference parking registration plugin
"""

from typing import Optional

from pydantic import BaseModel

from ..base import PluginParameter, TypedPlugin


class ParkingRegistrationRequest(BaseModel):
    name: Optional[str] = None
    company_name: Optional[str] = None
    role: Optional[str] = None
    license_plate: Optional[str] = None


class ParkingRegistrationPlugin(TypedPlugin[ParkingRegistrationRequest]):
    """Intake only: formats the registration, nothing is stored"""

    name = "ParkingRegistrationPlugin"
    description = (
        "You register attendees of the conference with mandatory fields: "
        "Name, Company Name, Role, License Plate."
    )
    request_model = ParkingRegistrationRequest
    parameters = [
        PluginParameter(name="name", description="Name of the attendee, e.g. John Doe"),
        PluginParameter(name="companyName", target="company_name", description="Name of the company, e.g. Contoso"),
        PluginParameter(name="role", description="Role of the attendee, e.g. Developer"),
        PluginParameter(name="licensePlate", target="license_plate", description="License plate of the car, e.g. 123ABC"),
    ]

    async def run(self, request: ParkingRegistrationRequest) -> str:
        return (
            f"Car registered Name: {request.name} CompanyName: {request.company_name} "
            f"Role: {request.role} LicensePlate: {request.license_plate}"
        )
