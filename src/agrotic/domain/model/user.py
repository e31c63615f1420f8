"""User record as seen through the user directory collaborator."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class User:

    id: str
    dni: int
    first_names: str
    last_names: str

    @property
    def full_name(self) -> str:
        return f"{self.first_names} {self.last_names}"

    @property
    def responsible_label(self) -> str:
        """Denormalised "name - dni" string written on movements."""
        return f"{self.full_name} - {self.dni}"
