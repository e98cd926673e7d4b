"""Authority targets.

An authority is anything that can hold roles. RoleKeeper never owns
authorities; it only stores their type tag and key in the assignment table.
"""

from dataclasses import dataclass, field


@dataclass
class AuthorityTarget:
    """A resolved set of authorities of one type.

    Attributes:
        type_tag: Stable type tag stored in ``entity_type``.
        keys: Authority keys stored in ``entity_id``.
    """

    type_tag: str
    keys: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate the target after initialization."""
        if not self.type_tag:
            raise ValueError("Authority type tag is required")
