import logging
from basket.domain.Settings import Settings
from basket.infra.Blob_Store import BlobStore
from basket.infra.paths import STORAGE_FILE
from basket.utilities.constants import SETTINGS_STORAGE_KEY

logger = logging.getLogger(__name__)


class SettingsRepository:
    """Persists Settings as a flat JSON object under a fixed storage key."""

    def __init__(self, store: BlobStore = None, key: str = SETTINGS_STORAGE_KEY):
        self.store = store or BlobStore(STORAGE_FILE)
        self.key = key

    def load(self) -> Settings:
        """Read settings with graceful fallback to defaults."""
        try:
            data = self.store.get(self.key)
        except OSError as e:
            logger.error(f"Error reading settings: {e}")
            return Settings()
        if data is None:
            logger.info(f"No stored settings under '{self.key}'. Using defaults.")
            return Settings()
        if not isinstance(data, dict):
            logger.warning(f"Stored settings under '{self.key}' are not an object. Using defaults.")
            return Settings()
        return Settings.from_dict(data)

    def save(self, settings: Settings) -> None:
        self.store.set(self.key, settings.to_dict())
