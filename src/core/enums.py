from enum import Enum


class FinalizePolicy(Enum):
    ROLLBACK_ON_ERROR = "rollback_on_error"
    ALWAYS_COMMIT = "always_commit"

    @classmethod
    def from_any(cls, value):
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower().replace("-", "_")
            legacy_map = {
                "rollback": cls.ROLLBACK_ON_ERROR,
                "strict": cls.ROLLBACK_ON_ERROR,
                "commit": cls.ALWAYS_COMMIT,
                "always": cls.ALWAYS_COMMIT,
            }
            if normalized in legacy_map:
                return legacy_map[normalized]
            for member in cls:
                if member.value == normalized or member.name.lower() == normalized:
                    return member
        raise ValueError(f"Cannot parse {value!r} into {cls.__name__}")

    def commits_on_error(self) -> bool:
        return self is FinalizePolicy.ALWAYS_COMMIT

    @property
    def label(self):
        return _POLICY_LABELS.get(self, self.name.title())


_POLICY_LABELS = {
    FinalizePolicy.ROLLBACK_ON_ERROR: "Rollback on error",
    FinalizePolicy.ALWAYS_COMMIT: "Always commit",
}
