import typing as t

from envier import Env

from diagtrace.constants import DEFAULT_COLLECTOR_URL
from diagtrace.constants import HTTP_CLIENT_COMPONENT
from diagtrace.exceptions import ConfigException


def parse_list(value: t.Union[str, None]) -> t.List[str]:
    if not isinstance(value, str):
        return []

    fragments = [s.strip() for s in value.split(",")]
    return [f for f in fragments if f != ""]


class DiagtraceConfig(Env):
    __prefix__ = "diagtrace"

    enabled = Env.var(bool, "enabled", default=True)
    collector_url = Env.var(str, "collector_url", default=DEFAULT_COLLECTOR_URL)
    # Never trace the requests that export spans to the collector
    ignore_collector = Env.var(bool, "ignore_collector", default=True)


class HttpClientConfig(Env):
    __prefix__ = "diagtrace.http_client"

    component_name = Env.var(str, "component_name", default=HTTP_CLIENT_COMPONENT)
    inject_enabled = Env.var(bool, "inject_enabled", default=True)
    ignore_urls = Env.var(list, "ignore_urls", parser=parse_list, default=[])


config = DiagtraceConfig()
http_client_config = HttpClientConfig()


__all__ = [
    "ConfigException",
    "DiagtraceConfig",
    "HttpClientConfig",
    "config",
    "http_client_config",
    "parse_list",
]
