"""
Application Mode
dev, stage, prod, test or any custom string
"""
from willow.defaults import DEFAULT_MODE, MODE_ENV_VAR
from willow.support.config import Config
from willow.support.env_helper import EnvHelper


class Mode:
    """
    The mode/environment the application runs in

    Read from the `app.mode` config key, then the WILLOW_MODE environment
    variable, then 'dev'.
    """

    @staticmethod
    def get() -> str:
        return Config.get('app.mode') or EnvHelper.get(MODE_ENV_VAR, DEFAULT_MODE)

    @classmethod
    def is_(cls, mode: str) -> bool:
        return cls.get() == mode

    @classmethod
    def is_dev(cls) -> bool:
        return cls.is_('dev')

    @classmethod
    def is_stage(cls) -> bool:
        return cls.is_('stage')

    @classmethod
    def is_prod(cls) -> bool:
        return cls.is_('prod')

    @classmethod
    def is_test(cls) -> bool:
        return cls.is_('test')

    @classmethod
    def is_deployed(cls) -> bool:
        """True if the application is deployed to a host"""
        return cls.is_stage() or cls.is_prod()
