"""Authority resolution.

Turns the flexible authority argument accepted by assignment operations
(an instance, a collection of instances, or a type plus explicit keys) into
an ``AuthorityTarget``, and maps authority classes to the type tags stored
in the assignment table.
"""

from collections.abc import Iterable
from typing import Any

from rolekeeper.core.config import Settings
from rolekeeper.domain.entities.authority import AuthorityTarget
from rolekeeper.domain.exceptions import InvalidAuthority


def qualified_name(cls: type) -> str:
    """Get the dotted ``module.QualName`` path of a class."""
    return f"{cls.__module__}.{cls.__qualname__}"


class AuthorityResolver:
    """Resolves authorities to type tags and keys.

    Type tag lookup order:
    1. The configured morph map (dotted class path -> tag)
    2. A ``__morph_type__`` class attribute
    3. The dotted class path itself
    """

    def __init__(self, settings: Settings):
        """Initialize the resolver.

        Args:
            settings: Settings carrying the morph map and key attribute.
        """
        self.morph_map = dict(settings.morph_map)
        self.key_attribute = settings.authority_key_attribute

    def type_tag(self, authority: Any) -> str:
        """Get the type tag for an authority instance, class or tag.

        Args:
            authority: Authority instance, authority class, or a type tag string.

        Returns:
            The tag stored in ``entity_type``.
        """
        if isinstance(authority, str):
            return authority

        cls = authority if isinstance(authority, type) else type(authority)
        path = qualified_name(cls)
        if path in self.morph_map:
            return self.morph_map[path]

        morph_type = getattr(cls, "__morph_type__", None)
        if morph_type:
            return morph_type
        return path

    def key_of(self, authority: Any) -> int:
        """Get the key of a single authority instance."""
        try:
            key = getattr(authority, self.key_attribute)
        except AttributeError:
            raise InvalidAuthority(
                f"{type(authority).__name__} has no '{self.key_attribute}' attribute"
            ) from None
        if key is None:
            raise InvalidAuthority(f"{type(authority).__name__} has not been persisted")
        return key

    def extract_model_and_keys(
        self,
        authority: Any,
        keys: Iterable[int] | None = None,
    ) -> AuthorityTarget:
        """Resolve an authority argument into a type tag and keys.

        Args:
            authority: A single authority instance, a collection of instances
                of the same type, or (when ``keys`` is given) a class or tag.
            keys: Optional explicit keys overriding those of ``authority``.

        Returns:
            AuthorityTarget: The type tag and keys to operate on.

        Raises:
            InvalidAuthority: If the argument cannot be resolved.
        """
        if keys is not None:
            if self._is_collection(authority):
                authority = self._first(authority)
            return AuthorityTarget(type_tag=self.type_tag(authority), keys=list(keys))

        if isinstance(authority, (str, type)):
            raise InvalidAuthority("Keys are required when passing an authority type")

        if not self._is_collection(authority):
            return AuthorityTarget(
                type_tag=self.type_tag(authority),
                keys=[self.key_of(authority)],
            )

        members = list(authority)
        if not members:
            raise InvalidAuthority("Cannot resolve an empty authority collection")

        tags = {self.type_tag(member) for member in members}
        if len(tags) > 1:
            raise InvalidAuthority(
                f"Authority collection mixes types: {', '.join(sorted(tags))}"
            )

        return AuthorityTarget(
            type_tag=tags.pop(),
            keys=[self.key_of(member) for member in members],
        )

    @staticmethod
    def _is_collection(value: Any) -> bool:
        return isinstance(value, Iterable) and not isinstance(value, (str, bytes, type))

    @staticmethod
    def _first(collection: Iterable[Any]) -> Any:
        for member in collection:
            return member
        raise InvalidAuthority("Cannot resolve an empty authority collection")
