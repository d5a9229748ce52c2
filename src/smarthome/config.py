from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

DEMO_FALLBACK_PASSWORD = "secret123"


class SmartHomeConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SMARTHOME_")

    tcp_host: str = "0.0.0.0"
    tcp_port: int = 9000
    max_sessions: int = 64
    stream_limit: int = 64 * 1024

    log_file: str = "/tmp/smarthome.log"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    seed_demo_data: bool = True
    demo_username: str = "alice"
    demo_email: str = "alice@example.com"
    demo_password_file: str = ""

    def read_secret(self, path: str) -> str:
        if not path:
            return ""
        try:
            with open(path) as f:
                return f.read().strip()
        except FileNotFoundError:
            return ""

    def demo_password(self) -> str:
        return self.read_secret(self.demo_password_file) or DEMO_FALLBACK_PASSWORD
