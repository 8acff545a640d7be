import os
import tomllib
from pathlib import Path


class Configurator:
    """Loads a dict of config from TOML file(s) and behaves like an object, ie config.VALUE"""

    configuration = None

    def __init__(self):
        if not self.configuration:
            self.configure()

    def configure(self):
        # load default settings
        with open(Path(__file__).parent / "config_default.toml", "rb") as f:
            configuration = tomllib.load(f)

        # override with local settings
        local_settings = os.environ.get("CORS_POLICY_SETTINGS", Path.cwd() / "config.toml")
        if Path(local_settings).exists():
            with open(local_settings, "rb") as f:
                configuration.update(tomllib.load(f))

        # override with os env settings
        for config_key in configuration:
            if config_key in os.environ:
                value = os.getenv(config_key)
                # Casting env value
                if isinstance(configuration[config_key], list):
                    value = [v.strip() for v in value.split(",") if v.strip()]
                elif isinstance(configuration[config_key], bool):
                    value = value.lower() in ["true", "1", "t", "y", "yes"]
                elif isinstance(configuration[config_key], int):
                    value = int(value)
                elif isinstance(configuration[config_key], float):
                    value = float(value)
                configuration[config_key] = value

        self.configuration = configuration
        self.check()

    def override(self, **kwargs):
        self.configuration.update(kwargs)
        self.check()

    def check(self):
        """Sanity check on config"""
        has_whitelist = self.configuration.get("CORS_ORIGIN_WHITELIST") or self.configuration.get(
            "CORS_ORIGIN_WHITELIST_URL"
        )
        if self.configuration.get("CORS_ORIGIN") and has_whitelist:
            raise ValueError("CORS_ORIGIN cannot be combined with an origin whitelist")

    def __getattr__(self, __name):
        return self.configuration.get(__name)

    @property
    def __dict__(self):
        return self.configuration


config = Configurator()
