from unitycure.models.user import User
from unitycure.models.hospital import Hospital
from unitycure.models.appointment import Appointment
from unitycure.models.sos_report import SosReport
from unitycure.models.feedback import Feedback
from unitycure.models.provider import Provider
from unitycure.models.contact_message import ContactMessage
from unitycure.models.chatbot_message import ChatbotMessage

__all__ = ["User", "Hospital", "Appointment", "SosReport", "Feedback", "Provider",
           "ContactMessage", "ChatbotMessage"]
