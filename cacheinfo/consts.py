# Key grammar
KEY_SEPARATOR = "::"  # Between key segments in string-keyed stores
KEY_PATH_SEPARATOR = "/"  # Between path nodes in a user-visible item key
FORMATTED_KEY_SEPARATOR = " ⇒ "  # Human-readable rendering of KEY_SEPARATOR

# Item namespaces (first segment after the installation/application prefix)
ITEM_DATA_NAMESPACE = "data"
ITEM_LOCK_NAMESPACE = "lock"

# Namespace used by a pool that has none configured
DEFAULT_POOL_NAMESPACE = "default"

# Installation IDs are MD5 hex digests, matched in either case
INSTALLATION_ID_PATTERN = r"(?i:[a-f0-9]{32})"

# Characters that mark a search string as a pre-built pattern
SEARCH_PATTERN_METACHARACTERS = r"[:^$!?{}]"
SEARCH_PATTERN_DELIMITED = r"^/.+/$"

# Display labels
DRIVER_LABEL_TEMPLATE = "cache.driver.{name}.label"
POOL_LABEL_TEMPLATE = "cache.pool.{name}.label"

# Registered driver names
DRIVER_MEMORY = "memory"
DRIVER_EPHEMERAL = "ephemeral"
DRIVER_MEMCACHE = "memcache"
DRIVER_REDIS = "redis"
DRIVER_COMPOSITE = "composite"
