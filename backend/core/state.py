# backend/core/state.py

from enum import Enum


class CallStatus(str, Enum):
    IDLE = "idle"
    CONNECTING = "connecting"
    ACTIVE = "active"
    FINISHED = "finished"


class SessionMode(str, Enum):
    # "generate" sessions collect interview details by voice; no feedback.
    GENERATE = "generate"
    INTERVIEW = "interview"


class VoiceErrorKind(str, Enum):
    PERMISSION = "permission"
    NETWORK = "network"
    EJECTION = "ejection"
    UNCLASSIFIED = "unclassified"
