from dataclasses import dataclass


@dataclass(frozen=True)
class DirectorUuid:
    """
    Value Object identifying the director instance in every CPI request.
    """
    value: str

    def __post_init__(self):
        if not self.value or not self.value.strip():
            raise ValueError("Director UUID cannot be empty")

    def __str__(self):
        return self.value
