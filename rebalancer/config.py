from pydantic import BaseModel
from dotenv import load_dotenv
import os
load_dotenv()

class Settings(BaseModel):
    app_env: str = os.getenv("APP_ENV", "dev")
    tz: str = os.getenv("TZ", "Africa/Johannesburg")

    # Brokerage REST connection
    broker_base_url: str = os.getenv("BROKER_BASE_URL", "")
    broker_api_token: str = os.getenv("BROKER_API_TOKEN", "")

    # Endpoint path templates
    broker_path_holdings: str = os.getenv("BROKER_PATH_HOLDINGS", "/api/accounts/{account_id}/holdings")
    broker_path_funds: str = os.getenv("BROKER_PATH_FUNDS", "/api/accounts/{account_id}/funds-summary")
    broker_path_price: str = os.getenv("BROKER_PATH_PRICE", "/api/instruments/{code}/price")

    # Transport: timeout, retry and rate limit
    broker_timeout_sec: float = float(os.getenv("BROKER_TIMEOUT_SEC", "15"))
    broker_max_attempts: int = int(os.getenv("BROKER_MAX_ATTEMPTS", "5"))
    broker_get_rps: int = int(os.getenv("BROKER_GET_RPS", "5"))
    broker_get_rpm: int = int(os.getenv("BROKER_GET_RPM", "200"))

    # CLI defaults
    default_targets_file: str = os.getenv("DEFAULT_TARGETS_FILE", "targets.example.json")

    def resolve_broker(self) -> dict:
        return {
            "base": self.broker_base_url,
            "token": self.broker_api_token,
            "timeout": self.broker_timeout_sec,
            "max_attempts": self.broker_max_attempts,
            "rps": self.broker_get_rps,
            "rpm": self.broker_get_rpm,
        }

    def missing_broker_keys(self) -> list[str]:
        conf = self.resolve_broker()
        return [k for k in ("base", "token") if not str(conf.get(k) or "").strip()]
