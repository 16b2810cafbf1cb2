from __future__ import annotations
import os
from pathlib import Path
from typing import Dict, FrozenSet, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from product_upload.transform import TransformOptions


ROOT = Path(__file__).resolve().parents[2]


def default_settings() -> Dict:
    assets = ROOT / "assets"
    return {
        "ngrok_url": "",
        "ngrok_prefix": "",
        "ngrok_authtoken": "",
        "skus_to_include": "",
        "skip_image_upload": False,
        "server_port": 8080,
        "shop": "",
        "assets_dir": assets,
        "products_file": assets / "products.xlsx",
        "images_dir": assets / "images",
        "output_dir": ROOT / "output",
        "log_level": "INFO",
    }


class Settings(BaseModel):
    ngrok_url: str = ""
    ngrok_prefix: str = ""
    ngrok_authtoken: str = ""
    skus_to_include: str = ""
    skip_image_upload: bool = False
    server_port: int = 8080
    shop: str = ""
    assets_dir: Path
    products_file: Path
    images_dir: Path
    output_dir: Path
    log_level: str = "INFO"

    @property
    def public_url(self) -> Optional[str]:
        """Persistent tunnel url, when one is configured."""
        if self.ngrok_url.strip():
            return self.ngrok_url.strip().rstrip("/")
        if self.ngrok_prefix.strip():
            return f"https://{self.ngrok_prefix.strip()}.ngrok.io"
        return None

    @property
    def include_skus(self) -> Optional[FrozenSet[str]]:
        skus = frozenset(s.strip() for s in self.skus_to_include.split(",") if s.strip())
        return skus or None

    @property
    def shop_name(self) -> str:
        return self.shop.strip() or "<your-store>"

    def transform_options(self) -> TransformOptions:
        return TransformOptions(skip_image_upload=self.skip_image_upload, include_skus=self.include_skus)


def _flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes")


def settings_from_env(env: Mapping[str, str]) -> Settings:
    base = default_settings()
    assets = Path(env.get("ASSETS_DIR") or base["assets_dir"])
    return Settings(
        ngrok_url=env.get("NGROK_URL", ""),
        ngrok_prefix=env.get("NGROK_PREFIX", ""),
        ngrok_authtoken=env.get("NGROK_AUTHTOKEN", ""),
        skus_to_include=env.get("SKUS_TO_INCLUDE", ""),
        skip_image_upload=_flag(env.get("SKIP_IMAGE_UPLOAD", "")),
        server_port=int(env.get("SERVER_PORT") or base["server_port"]),
        shop=env.get("SHOP", ""),
        assets_dir=assets,
        products_file=Path(env.get("PRODUCTS_FILE") or assets / "products.xlsx"),
        images_dir=Path(env.get("IMAGES_DIR") or assets / "images"),
        output_dir=Path(env.get("OUTPUT_DIR") or base["output_dir"]),
        log_level=env.get("LOG_LEVEL") or base["log_level"],
    )


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Load .env files (project root, then cwd, then ``env_file``) and read settings."""
    load_dotenv(ROOT / ".env")
    load_dotenv(Path.cwd() / ".env")
    if env_file:
        p = Path(env_file)
        if not p.exists():
            raise FileNotFoundError(f"Env file not found: {p}")
        load_dotenv(p, override=True)
    return settings_from_env(os.environ)
