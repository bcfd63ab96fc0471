from classroom.core.models.class_model import LiveClass
from classroom.core.models.enrollment import Enrollment
from classroom.core.models.recording import Recording
from classroom.core.models.chat_message import ChatMessage

__all__ = [
    "ChatMessage",
    "Enrollment",
    "LiveClass",
    "Recording",
]
