from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from handcalc.schemas import RuleSet


class Settings(BaseSettings):
    log_level: str = "WARNING"
    log_format: Literal["console", "json"] = "console"

    # default table rules
    aka_ari: bool = False
    kuitan_ari: bool = True
    double_yakuman_ari: bool = True
    kazoe_yakuman_ari: bool = True
    renpu_fu: int = 4
    yakuman_honba: bool = False

    model_config = SettingsConfigDict(env_prefix="HANDCALC_", env_file=".env", env_file_encoding="utf-8")

    def rules(self) -> RuleSet:
        return RuleSet(
            aka_ari=self.aka_ari,
            kuitan_ari=self.kuitan_ari,
            double_yakuman_ari=self.double_yakuman_ari,
            kazoe_yakuman_ari=self.kazoe_yakuman_ari,
            renpu_fu=self.renpu_fu,
            yakuman_honba=self.yakuman_honba,
        )


settings = Settings()
