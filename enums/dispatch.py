from enum import Enum


class ErrorKind(Enum):
    AUTHENTICATION = ("authentication", "Unauthorized request.")
    VALIDATION = ("validation", "Invalid payload request.")
    CONFIGURATION = ("configuration", "RPC not configured or found.")
    TOKEN = ("token", "Invalid token.")
    SUBMISSION = ("submission", "Unknown error occurred.")

    @property
    def label(self):
        return self.value[0]

    @property
    def message(self):
        return self.value[1]
