"""Custom pydantic-settings source backed by a ConfigStore.

Lets an application's own settings class take values from merged config
files through `settings_customise_sources()`.
"""

from collections.abc import Iterable

from pydantic_settings import BaseSettings
from pydantic_settings.sources import InitSettingsSource

from .store import ConfigStore


class MergedConfigSource(InitSettingsSource):
    """Settings source that merges a store's config types.

    Example::

        class ToolSettings(BaseSettings):
            model_config = SettingsConfigDict(env_prefix="TOOL_")
            verbose: bool = False

            @classmethod
            def settings_customise_sources(cls, settings_cls, init_settings,
                                           env_settings, dotenv_settings,
                                           file_secret_settings):
                store = create_store("tool")
                return (init_settings, env_settings,
                        MergedConfigSource(settings_cls, store))

    Sources earlier in the returned tuple take precedence, so environment
    variables and constructor kwargs still override file values.
    """

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        store: ConfigStore,
        names: str | Iterable[str] | None = None,
    ) -> None:
        """Initialize the source.

        Args:
            settings_cls: The pydantic-settings class.
            store: Store whose types are merged.
            names: Types to merge, in precedence order. All types in
                registration order when None.
        """
        self.store = store
        self.names = names

        # Merge up front, then hand the dict to InitSettingsSource
        super().__init__(settings_cls, store.merge(names))
