"""Provider implementations and registry."""

from reposync.providers._retrying_transport import RetryingTransport, create_http_client
from reposync.providers.base import BaseProvider
from reposync.providers.github import GitHubProvider
from reposync.providers.gitlab import GitLabProvider
from reposync.providers.registry import ProviderRegistry, register, registered_ids
from reposync.providers.yaml_manifest import YamlManifestProvider

for _provider_cls in (GitHubProvider, GitLabProvider, YamlManifestProvider):
    register(_provider_cls.provider_id, _provider_cls)

__all__ = [
    "BaseProvider",
    "GitHubProvider",
    "GitLabProvider",
    "ProviderRegistry",
    "RetryingTransport",
    "YamlManifestProvider",
    "create_http_client",
    "register",
    "registered_ids",
]
