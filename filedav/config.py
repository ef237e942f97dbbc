import json
import logging
import os
from typing import Any
from typing import Dict
from typing import Optional

from filedav.davclient import CONNKEYS
from filedav.davclient import DAVClient

"""
Configuration glue.  ``get_davclient`` builds a DAVClient from keyword
arguments, from environment variables prepended with ``FILEDAV_`` or
from a JSON or YAML configuration file.

A configuration file may look like this::

    {
        "default": {
            "filedav_url": "https://cloud.example.com/remote.php/dav/files/tobias/",
            "filedav_user": "tobias",
            "filedav_pass": "hunter2"
        },
        "work": {
            "inherits": "default",
            "filedav_url": "https://dav.example.org/"
        }
    }
"""

log = logging.getLogger("filedav")

## Values in environment variables and config files are strings
_BOOLEAN_KEYS = ("preemptive", "huge_tree")
_INTEGER_KEYS = ("timeout", "chunk_size")


def get_section(config: Dict, section: str = "default") -> Dict:
    """
    Returns the named section of the configuration, with the settings
    of the section it ``inherits`` from filled in.
    """
    if section in config and "inherits" in config[section]:
        ret = get_section(config, config[section]["inherits"])
    else:
        ret = {}
    if section in config:
        ret.update(config[section])
    return ret


def read_config(fn: Optional[str]) -> Optional[Dict]:
    """
    Reads a JSON or YAML configuration file.  If no file name is
    given, the standard locations are tried.  Returns None if no
    config file is found, an empty dict if it can't be parsed.
    """
    if not fn:
        cfgdir = f"{os.environ.get('HOME', '/')}/.config/"
        for config_file in (
            f"{cfgdir}/filedav/filedav.conf",
            f"{cfgdir}/filedav/filedav.yaml",
            f"{cfgdir}/filedav/filedav.json",
            "/etc/filedav/filedav.conf",
        ):
            cfg = read_config(config_file)
            if cfg:
                return cfg
        return None

    try:
        with open(fn, "rb") as config_file:
            data = config_file.read()
    except FileNotFoundError:
        log.info("no config file found at %s" % fn)
        return None

    try:
        return json.loads(data)
    except ValueError:
        pass

    ## Late import.  yaml is only needed for yaml config files
    try:
        import yaml
    except ImportError:
        log.error(
            f"config file {fn} exists but is not valid json, and pyyaml is not installed."
        )
        return {}
    try:
        cfg = yaml.safe_load(data)
    except yaml.YAMLError:
        log.error(f"config file {fn} is neither valid json nor yaml.  It will be ignored")
        return {}
    if not isinstance(cfg, dict):
        log.error(f"config file {fn} does not contain a mapping.  It will be ignored")
        return {}
    return cfg


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _conn_params(conf: Dict[str, Any]) -> Dict[str, Any]:
    """
    Filters out unknown keys and converts string values to the types
    DAVClient expects.
    """
    params = {}
    for key, value in conf.items():
        if key == "user":
            key = "username"
        if key == "pass":
            key = "password"
        if key not in CONNKEYS:
            log.warning("unknown connection parameter %s ignored" % key)
            continue
        if key in _BOOLEAN_KEYS:
            value = _to_bool(value)
        elif key in _INTEGER_KEYS and isinstance(value, str):
            try:
                value = int(value)
            except ValueError as e:
                raise ValueError(
                    "connection parameter %s must be an integer, not %r" % (key, value)
                ) from e
        elif key == "ssl_verify_cert" and isinstance(value, str):
            ## either a boolean or the path to a CA bundle
            if value.strip().lower() in ("0", "false", "no", "off", "1", "true", "yes", "on"):
                value = _to_bool(value)
        params[key] = value
    return params


def get_davclient(
    check_config_file: bool = True,
    config_file: Optional[str] = None,
    config_section: Optional[str] = None,
    environment: bool = True,
    **config_data,
) -> Optional[DAVClient]:
    """
    This function will yield a DAVClient object.  It will not try to
    connect.  It will read configuration from various sources, in
    this order, the first one giving a url wins:

    * Data from the parameters given
    * Environment variables prepended with `FILEDAV_`, like `FILEDAV_URL`,
      `FILEDAV_USERNAME`, `FILEDAV_PASSWORD`.
    * Environment variables `FILEDAV_CONFIG_FILE` and
      `FILEDAV_CONFIG_SECTION` will be honored if environment is set
    * Configuration file, keys prepended with `filedav_`.

    Returns None if no configuration was found.
    """
    if config_data:
        return DAVClient(**_conn_params(config_data))

    if environment:
        conf = {}
        for conf_key in (
            x
            for x in os.environ
            if x.startswith("FILEDAV_")
            and not x.startswith("FILEDAV_CONFIG")
            and not x.startswith("FILEDAV_TEST_")
        ):
            conf[conf_key[8:].lower()] = os.environ[conf_key]
        if conf.get("url"):
            return DAVClient(**_conn_params(conf))
        if not config_file:
            config_file = os.environ.get("FILEDAV_CONFIG_FILE")
        if not config_section:
            config_section = os.environ.get("FILEDAV_CONFIG_SECTION")

    if check_config_file:
        cfg = read_config(config_file)
        if cfg:
            section = get_section(cfg, config_section or "default")
            conn_params = {}
            for k in section:
                if k.startswith("filedav_") and section[k] is not None:
                    conn_params[k[8:]] = section[k]
            if conn_params.get("url"):
                return DAVClient(**_conn_params(conn_params))

    return None
