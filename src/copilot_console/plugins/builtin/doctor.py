"""
Doctor intake plugin
"""

from typing import Optional

from pydantic import BaseModel

from ..base import PluginParameter, TypedPlugin


class DoctorRequest(BaseModel):
    patient_name: Optional[str] = None
    date_of_birth: Optional[str] = None
    current_medications: Optional[str] = None
    current_sickness: Optional[str] = None


class DoctorPlugin(TypedPlugin[DoctorRequest]):
    """
    Collects a patient intake record

    The model's recommendation is only printed; the intake record is what
    goes back into the conversation.
    """

    name = "DoctorPlugin"
    description = (
        "You consult patient if they are sick. Gather patient information for a medical record "
        "so a doctor can help by the automated medical record platform."
    )
    request_model = DoctorRequest
    parameters = [
        PluginParameter(name="patientName", target="patient_name", description="Full name of the patient"),
        PluginParameter(name="dateOfBirth", target="date_of_birth", description="Date of birth of the patient (YYYY-MM-DD)"),
        PluginParameter(name="currentMedications", target="current_medications", description="List of current medications"),
        PluginParameter(name="currentSickness", target="current_sickness", description="Description of the current sickness or symptoms"),
    ]

    async def run(self, request: DoctorRequest) -> str:
        patient_info = (
            f"\nPatient Name: {request.patient_name}\n"
            f"Date of Birth: {request.date_of_birth}\n"
            f"Current Medications: {request.current_medications}\n"
            f"Current Sickness: {request.current_sickness}\n"
        )

        console = self.context.console
        console.print(patient_info, style="magenta", markup=False)

        recommendation = await self.context.quick_prompt(
            patient_info, "Give me a potential cure as a doctor and recommendation"
        )

        console.print(f"{recommendation}\n", style="red", markup=False)
        console.print("Thank you for using the automated medical record platform. Have a nice day!")

        return patient_info
