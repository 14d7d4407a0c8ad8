from enum import Enum


class ProviderType(Enum):
    PSUTIL = "psutil"
    PROCSTAT = "procstat"
