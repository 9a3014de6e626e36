# shard_exporter/models.py
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from typing import Dict


class ClusterHealthSnapshot(BaseModel):
    """Respuesta de _cluster/health. Solo relocating_shards se usa hoy en las métricas."""
    model_config = ConfigDict(frozen=True, strict=True)

    cluster_name: str = ""
    status: str = ""
    timed_out: bool = False
    number_of_nodes: int = 0
    number_of_data_nodes: int = 0
    active_primary_shards: int = 0
    active_shards: int = 0
    relocating_shards: int = 0
    initializing_shards: int = 0
    unassigned_shards: int = 0
    delayed_unassigned_shards: int = 0
    number_of_pending_tasks: int = 0
    number_of_in_flight_fetch: int = 0
    task_max_waiting_in_queue_millis: int = 0
    active_shards_percent_as_number: float = 0.0


class IndexSection(BaseModel):
    # Elasticsearch devuelve estos valores como strings decimales
    model_config = ConfigDict(frozen=True, strict=True)

    number_of_replicas: str = ""
    number_of_shards: str = ""


class SettingsSection(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True)

    index: IndexSection = Field(default_factory=IndexSection)


class IndexSettings(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True)

    settings: SettingsSection = Field(default_factory=SettingsSection)

    @property
    def number_of_replicas(self) -> str:
        return self.settings.index.number_of_replicas

    @property
    def number_of_shards(self) -> str:
        return self.settings.index.number_of_shards


IndexSettingsMap = Dict[str, IndexSettings]
INDEX_SETTINGS_ADAPTER = TypeAdapter(IndexSettingsMap)
