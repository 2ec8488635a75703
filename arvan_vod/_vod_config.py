import json
import os
from configparser import ConfigParser
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import toml
from dotenv import dotenv_values

DEFAULT_HOST = "https://napi.arvancloud.ir/vod/2.0"
DEFAULT_DEBUG_FILE = "arvan_vod_debug.log"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class VodConfig:
    """
    Configuration class for the Arvan VOD client.

    This class holds the values the request pipeline reads: the API host, the API key sent
    in the ``Authorization`` header, and the wire-level debug trace settings. Values can be
    provided via input parameters, a configuration file or environment variables.

    The priority for each field is as follows:
    1. If a parameter is passed during initialization, it is used.
    2. If a configuration file is given (json, toml, ini or .env), its values are used.
    3. Otherwise it falls back to the process environment.

    Environment Variables (or configuration file keys):
    - `ARVAN_VOD_HOST`: Base URL of the API. Defaults to "https://napi.arvancloud.ir/vod/2.0".
    - `ARVAN_API_KEY`: The API key, sent verbatim as the ``Authorization`` header.
    - `ARVAN_VOD_DEBUG`: Enables the wire-level debug trace ("1", "true", "yes" or "on").
    - `ARVAN_VOD_DEBUG_FILE`: File the debug trace is appended to.

    Parameters:
    ----------
    host: str, optional
        The base URL every route is appended to.
    api_key: str, optional
        The API key. When empty, no ``Authorization`` header is sent.
    debug: bool, optional
        Whether to append request/response trace records to ``debug_file``. When not given,
        it is read from `ARVAN_VOD_DEBUG`, so an explicit False always wins.
    debug_file: str, optional
        Path of the debug trace file. Defaults to "arvan_vod_debug.log".
    timeout_seconds: float, optional
        Transport timeout for a single call. Defaults to 15 seconds.
    json_path: str, optional
        The path to a JSON file containing configuration settings.
    toml_path: str, optional
        The path to a TOML file containing configuration settings.
    ini_path: str, optional
        The path to an INI file containing configuration settings.
    env_path: str, optional
        The path to a .env file containing configuration settings.

    Raises:
    -------
    ValueError
        If the resolved host is empty.
    """

    host: str = ""
    api_key: Optional[str] = None
    debug: Optional[bool] = None
    debug_file: str = ""
    timeout_seconds: float = 15
    json_path: str = field(default_factory=lambda: os.getenv("ARVAN_VOD_JSON_PATH", ""))
    toml_path: str = field(default_factory=lambda: os.getenv("ARVAN_VOD_TOML_PATH", ""))
    ini_path: str = field(default_factory=lambda: os.getenv("ARVAN_VOD_INI_PATH", ""))
    ini_profile: str = field(default_factory=lambda: os.getenv("ARVAN_VOD_INI_PROFILE", "default"))
    env_path: str = field(default_factory=lambda: os.getenv("ARVAN_VOD_ENV_PATH", ""))

    def __post_init__(self):
        if self.json_path:
            config = self.load_config_from_file(self.json_path)
        elif self.toml_path:
            config = self.load_config_from_file(self.toml_path)
        elif self.ini_path:
            config = self.load_config_from_file(self.ini_path)
        elif self.env_path:
            config = self.load_config_from_file(self.env_path)
        else:
            config = dict(os.environ)

        self.host = self.host or config.get("ARVAN_VOD_HOST") or DEFAULT_HOST
        self.api_key = self.api_key or config.get("ARVAN_API_KEY") or None
        if self.debug is None:
            self.debug = str(config.get("ARVAN_VOD_DEBUG", "")).strip().lower() in _TRUTHY
        self.debug_file = self.debug_file or config.get("ARVAN_VOD_DEBUG_FILE") or DEFAULT_DEBUG_FILE

        if not self.host.strip():
            raise ValueError("Missing required field: host (or ARVAN_VOD_HOST)")

    def load_config_from_file(self, file_path: str) -> dict:
        file_path = os.path.expanduser(file_path)
        if not os.path.exists(file_path):
            raise FileNotFoundError(f"Configuration file '{file_path}' does not exist.")

        _, ext = os.path.splitext(file_path)
        ext = ext.lower()
        if not ext and os.path.basename(file_path).startswith(".env"):
            ext = ".env"

        if ext == ".ini":
            return self.read_credentials_from_ini(file_path, self.ini_profile)
        if ext == ".env":
            return {key: value for key, value in dotenv_values(file_path).items() if value is not None}

        with open(file_path, "r") as f:
            if ext == ".json":
                return json.load(f)
            elif ext == ".toml":
                return toml.load(f)
            else:
                raise ValueError(f"Unsupported config file type: '{ext}'. Use .json, .toml, .ini or .env")

    @staticmethod
    def read_credentials_from_ini(ini_path: str, profile: str = "default") -> dict[str, str]:
        """
        Read configuration values from an INI file.

        Parameters
        ----------
        ini_path : str
            The path to the INI file.
        profile : str, optional
            The profile section name to read from. Defaults to 'default'.

        Returns
        -------
        dict
            Dictionary containing the profile values with upper-cased keys.

        Raises
        ------
        FileNotFoundError
            If the INI file does not exist.
        ValueError
            If the specified profile is not found in the INI file.
        """
        ini_file = Path(ini_path).expanduser().resolve()

        if not ini_file.exists():
            raise FileNotFoundError(f"INI config file not found at: {ini_file}")

        config_parser = ConfigParser()
        config_parser.read(ini_file)

        if profile not in config_parser:
            available = ", ".join(config_parser.sections()) or "no profiles"
            raise ValueError(f"Profile '{profile}' not found in INI file. Available profiles: {available}")

        return {key.upper(): value for key, value in config_parser[profile].items()}

    def get_host(self) -> str:
        return self.host

    def get_api_key(self) -> Optional[str]:
        return self.api_key

    def get_debug(self) -> bool:
        return bool(self.debug)

    def get_debug_file(self) -> str:
        return self.debug_file
