"""Codec for the structural key grammar of string-keyed backends.

Keys are built from ordered namespace segments:

    installation_id :: [application_namespace ::] item_namespace :: [pool_namespace ::] item_id

where ``item_namespace`` is either the data or the lock namespace. The item ID
is the user-visible key path, its path nodes joined by the key separator.

Decoding is total: a key that does not match the grammar decodes to ``None``
and callers display the raw key instead. Encoding a decoded item ID is not
guaranteed to reproduce the raw key byte for byte (path separators are
normalized), which is acceptable for display purposes.
"""

import logging
import re
from collections.abc import Callable

from cacheinfo.consts import FORMATTED_KEY_SEPARATOR, INSTALLATION_ID_PATTERN
from cacheinfo.errors import InvalidKeySegment
from cacheinfo.models.model_config import KeyGrammarConfig
from cacheinfo.models.model_keys import KeyComponents

logger = logging.getLogger(__name__)

KeyMaker = Callable[[list[str]], str]


class KeyCodec:
    """Encodes namespace segments into keys and decodes keys into components.

    The installation ID, application namespace and pool namespace are fixed
    per codec. They are inserted into the decoding pattern as literals, so
    regex metacharacters in a namespace never act as wildcards.
    """

    def __init__(
        self,
        installation_id: str,
        application_namespace: str | None = None,
        pool_namespace: str | None = None,
        config: KeyGrammarConfig | None = None,
        key_maker: KeyMaker | None = None,
    ):
        """Initialize KeyCodec.

        Args:
            installation_id: Identifier of the backend installation.
            application_namespace: Namespace the backend stores keys under, if any.
            pool_namespace: Namespace of the pool being inspected, if any.
            config: Key grammar constants. Defaults to KeyGrammarConfig().
            key_maker: Backend-provided function turning segments into a full key.
                Defaults to joining the prefix and segments with the separator.
        """
        self.installation_id = installation_id
        self.application_namespace = application_namespace or None
        self.pool_namespace = pool_namespace or None
        self.config = config or KeyGrammarConfig()
        self.key_maker = key_maker
        self._parse_pattern: re.Pattern[str] | None = None

    def make_key(self, segments: list[str]) -> str:
        """Prefix segments with the installation and application namespaces."""
        if self.key_maker is not None:
            return self.key_maker(segments)

        prefix = [self.installation_id]
        if self.application_namespace:
            prefix.append(self.application_namespace)
        return self.config.separator.join(prefix + segments)

    def split_item_key(self, item_key: str) -> list[str]:
        """Split a user-visible key such as 'users/42' into path nodes."""
        path_separator = self.config.path_separator
        return item_key.strip(path_separator).split(path_separator)

    def segments(self, item_namespace: str, item_key: str | None = None) -> list[str]:
        """Build the ordered namespace segments for an item.

        Args:
            item_namespace: Data or lock namespace.
            item_key: Optional user-visible key path.

        Returns:
            [item_namespace, pool_namespace?, *item_key_path]

        Raises:
            InvalidKeySegment: If any segment is empty.
        """
        segments = [item_namespace]
        if self.pool_namespace:
            segments.append(self.pool_namespace)
        if item_key is not None:
            segments.extend(self.split_item_key(item_key))

        for segment in segments:
            if not segment.strip(self.config.separator):
                raise InvalidKeySegment(f"Invalid or empty segment in cache key: {segments!r}")

        return segments

    def compose(self, item_namespace: str, item_key: str | None = None, *, quote: bool = False) -> str:
        """Compose a full backend key.

        Args:
            item_namespace: Data or lock namespace.
            item_key: Optional user-visible key path. When omitted, the key is
                the prefix shared by every item of the namespace.
            quote: Escape the key for literal use inside a regular expression.

        Raises:
            InvalidKeySegment: If any segment is empty.
        """
        key = self.make_key(self.segments(item_namespace, item_key))
        return re.escape(key) if quote else key

    @property
    def parse_pattern(self) -> re.Pattern[str]:
        """Compiled decoding pattern, built on first use."""
        if self._parse_pattern is None:
            self._parse_pattern = self._build_parse_pattern()
        return self._parse_pattern

    def _build_parse_pattern(self) -> re.Pattern[str]:
        sep = re.escape(self.config.separator)

        application_alternatives = [INSTALLATION_ID_PATTERN]
        if self.application_namespace:
            application_alternatives.insert(0, re.escape(self.application_namespace))
        application = "|".join(application_alternatives)

        item_namespaces = "|".join(re.escape(ns) for ns in self.config.item_namespaces)

        pattern = f"^(?P<installation_id>{INSTALLATION_ID_PATTERN}){sep}"
        pattern += f"(?:(?P<application_namespace>{application}){sep})?"
        pattern += f"(?P<item_namespace>{item_namespaces}){sep}"
        if self.pool_namespace:
            pattern += f"(?:(?P<pool_namespace>{re.escape(self.pool_namespace)}){sep})?"
        pattern += "(?P<item_id>.+)$"

        logger.debug(f"Built key pattern: {pattern}")
        return re.compile(pattern, re.DOTALL)

    def parse(self, raw_key: str) -> KeyComponents | None:
        """Decode a raw backend key.

        Returns:
            The key components, or None if the key does not match the grammar.
        """
        match = self.parse_pattern.match(raw_key)
        if match is None:
            return None

        groups = match.groupdict()
        return KeyComponents(
            installation_id=groups["installation_id"],
            application_namespace=groups.get("application_namespace"),
            item_namespace=groups["item_namespace"],
            pool_namespace=groups.get("pool_namespace"),
            item_id=groups["item_id"],
            separator=self.config.separator,
        )

    def format_item_id(self, item_id: str) -> str:
        """Render an item ID as 'users ⇒ 42'."""
        separator = self.config.separator
        trimmed = item_id.strip(separator)
        return re.sub(f"(?:{re.escape(separator)})+", FORMATTED_KEY_SEPARATOR, trimmed)

    def format_key(self, raw_key: str, components: KeyComponents | None = None) -> str:
        """Human-readable form of a raw key, or the raw key if it does not decode."""
        if components is None:
            components = self.parse(raw_key)
        if components is None:
            return raw_key
        return self.format_item_id(components.item_id)


def main() -> None:
    """Example usage of KeyCodec."""
    codec = KeyCodec(installation_id="0123456789abcdef0123456789abcdef", pool_namespace="app1")

    raw_key = codec.compose("data", "users/42")
    print(f"Composed: {raw_key}")

    components = codec.parse(raw_key)
    if components:
        print(f"Item namespace: {components.item_namespace}")
        print(f"Item ID: {components.item_id}")
    print(f"Formatted: {codec.format_key(raw_key)}")


if __name__ == "__main__":
    main()
