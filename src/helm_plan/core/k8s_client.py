"""Kubernetes API wrapper (read-only namespace access)."""

from __future__ import annotations

from pathlib import Path

from kubernetes import client, config
from kubernetes.client import ApiException
from urllib3.exceptions import HTTPError

from helm_plan.core.errors import ClusterError

IN_CLUSTER_NAMESPACE_FILE = Path("/var/run/secrets/kubernetes.io/serviceaccount/namespace")


class K8sClient:
    """Thin wrapper around the Kubernetes Python client."""

    def __init__(self, context: str | None = None):
        self.context = context
        self._core_v1: client.CoreV1Api | None = None
        self._api_client: client.ApiClient | None = None
        self._in_cluster = False

    def _load_config(self) -> client.ApiClient:
        if self._api_client is not None:
            return self._api_client
        try:
            cfg = client.Configuration()
            config.load_kube_config(
                context=self.context,
                client_configuration=cfg,
            )
            # Prevent indefinite hangs on unreachable clusters
            cfg.retries = 1
            self._api_client = client.ApiClient(configuration=cfg)
        except config.ConfigException:
            try:
                config.load_incluster_config()
            except config.ConfigException as e:
                raise ClusterError(f"failed to load Kubernetes configuration: {e}") from e
            self._in_cluster = True
            self._api_client = client.ApiClient()
        return self._api_client

    @property
    def core_v1(self) -> client.CoreV1Api:
        if self._core_v1 is None:
            self._core_v1 = client.CoreV1Api(api_client=self._load_config())
        return self._core_v1

    @property
    def current_namespace(self) -> str:
        """Namespace of the active kube context, ``default`` when unset."""
        self._load_config()
        if self._in_cluster:
            try:
                return IN_CLUSTER_NAMESPACE_FILE.read_text(encoding="utf-8").strip() or "default"
            except OSError:
                return "default"
        try:
            contexts, active = config.list_kube_config_contexts()
        except config.ConfigException:
            return "default"
        ctx = active
        if self.context:
            ctx = next((c for c in contexts if c.get("name") == self.context), active)
        if not ctx:
            return "default"
        return ctx.get("context", {}).get("namespace") or "default"

    def list_namespace_names(self) -> list[str]:
        """List the names of every namespace in the cluster."""
        try:
            result = self.core_v1.list_namespace(_request_timeout=30)
        except ApiException as e:
            raise ClusterError(f"failed to list namespaces: {e.status} {e.reason}") from e
        except HTTPError as e:
            raise ClusterError(f"failed to list namespaces: cannot reach the cluster: {e}") from e
        return [ns.metadata.name for ns in result.items]
