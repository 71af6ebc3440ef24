from __future__ import annotations

import copy
from typing import Any, Dict


class IDomain:
    def to_dict(self) -> Dict[str, Any]:
        return dict(vars(self))

    def copy(self):
        return copy.copy(self)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in self.to_dict().items())
        return f"{type(self).__name__}({fields})"
