from __future__ import annotations

import re
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    model_validator,
)
from pydantic.alias_generators import to_pascal

# Port must not carry leading zeros so that parse/format round-trips.
INSTANCE_KEY_RE = re.compile(r"^([^:\s]+):(0|[1-9]\d*)$")


class InvalidInstanceKeyError(ValueError):
    """Raised when a string is not a single hostname:port pair."""


class OrchestratorModel(BaseModel):
    """
    Base for every record decoded from an envelope's Details.

    Orchestrator serializes Go structs with their exported field names, so
    snake_case attributes map onto PascalCase keys. Acronym-heavy names get
    an explicit alias. JSON null means "leave the zero value", as it does on
    the server side.
    """

    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class InstanceKey(OrchestratorModel):
    hostname: StrictStr = ""
    port: StrictInt = 0

    def __str__(self) -> str:
        return f"{self.hostname}:{self.port}"

    @classmethod
    def parse(cls, value: str) -> "InstanceKey":
        """Parse "host:port". Missing colon, extra colon or a bad port fail."""
        match = INSTANCE_KEY_RE.match(value or "")
        if not match:
            raise InvalidInstanceKeyError(
                f"Invalid instance key {value!r}: expected hostname:port"
            )
        return cls(hostname=match.group(1), port=int(match.group(2)))


class NullInt64(OrchestratorModel):
    """Nullable integer as serialized by Go's sql.NullInt64."""

    int64: StrictInt = 0
    valid: StrictBool = False

    @model_validator(mode="before")
    @classmethod
    def _from_scalar(cls, data: Any) -> Any:
        if data is None:
            return {"Int64": 0, "Valid": False}
        if isinstance(data, bool):
            return data
        if isinstance(data, float) and data.is_integer():
            data = int(data)
        if isinstance(data, int):
            return {"Int64": data, "Valid": True}
        return data

    @property
    def value(self) -> Optional[int]:
        return self.int64 if self.valid else None


class BinlogType(IntEnum):
    BINARY_LOG = 0
    RELAY_LOG = 1


class ReplicationThreadState(IntEnum):
    NO_THREAD = 0
    STOPPED = 1
    RUNNING = 2
    OTHER = 3


class CandidatePromotionRule(str, Enum):
    MUST = "must"
    PREFER = "prefer"
    NEUTRAL = "neutral"
    PREFER_NOT = "prefer_not"
    MUST_NOT = "must_not"


class BinlogCoordinates(OrchestratorModel):
    log_file: StrictStr = ""
    log_pos: StrictInt = 0
    type: Union[BinlogType, StrictInt] = Field(
        default=BinlogType.BINARY_LOG, union_mode="left_to_right"
    )

    def __str__(self) -> str:
        return f"{self.log_file}:{self.log_pos}"


class Instance(OrchestratorModel):
    key: InstanceKey = Field(default_factory=InstanceKey)
    instance_alias: StrictStr = ""
    uptime: StrictInt = 0
    server_id: StrictInt = Field(default=0, alias="ServerID")
    server_uuid: StrictStr = Field(default="", alias="ServerUUID")
    version: StrictStr = ""
    version_comment: StrictStr = ""
    flavor_name: StrictStr = ""
    read_only: StrictBool = False
    binlog_format: StrictStr = Field(default="", alias="Binlog_format")
    binlog_row_image: StrictStr = ""
    log_bin_enabled: StrictBool = False
    log_slave_updates_enabled: StrictBool = False
    log_replication_updates_enabled: StrictBool = False
    self_binlog_coordinates: BinlogCoordinates = Field(
        default_factory=BinlogCoordinates
    )
    master_key: InstanceKey = Field(default_factory=InstanceKey)
    master_uuid: StrictStr = Field(default="", alias="MasterUUID")
    ancestry_uuid: StrictStr = Field(default="", alias="AncestryUUID")
    is_detached_master: StrictBool = False

    slave_sql_running: StrictBool = Field(default=False, alias="Slave_SQL_Running")
    replication_sql_thread_running: StrictBool = Field(
        default=False, alias="ReplicationSQLThreadRuning"
    )
    slave_io_running: StrictBool = Field(default=False, alias="Slave_IO_Running")
    replication_io_thread_running: StrictBool = Field(
        default=False, alias="ReplicationIOThreadRuning"
    )
    # Servers report states outside the known members (e.g. -1); keep them as ints.
    replication_sql_thread_state: Union[ReplicationThreadState, StrictInt] = Field(
        default=ReplicationThreadState.NO_THREAD,
        alias="ReplicationSQLThreadState",
        union_mode="left_to_right",
    )
    replication_io_thread_state: Union[ReplicationThreadState, StrictInt] = Field(
        default=ReplicationThreadState.NO_THREAD,
        alias="ReplicationIOThreadState",
        union_mode="left_to_right",
    )

    has_replication_filters: StrictBool = False
    gtid_mode: StrictStr = Field(default="", alias="GTIDMode")
    supports_oracle_gtid: StrictBool = Field(default=False, alias="SupportsOracleGTID")
    using_oracle_gtid: StrictBool = Field(default=False, alias="UsingOracleGTID")
    using_mariadb_gtid: StrictBool = Field(default=False, alias="UsingMariaDBGTID")
    using_pseudo_gtid: StrictBool = Field(default=False, alias="UsingPseudoGTID")
    read_binlog_coordinates: BinlogCoordinates = Field(
        default_factory=BinlogCoordinates
    )
    exec_binlog_coordinates: BinlogCoordinates = Field(
        default_factory=BinlogCoordinates
    )
    is_detached: StrictBool = False
    relaylog_coordinates: BinlogCoordinates = Field(default_factory=BinlogCoordinates)
    last_sql_error: StrictStr = Field(default="", alias="LastSQLError")
    last_io_error: StrictStr = Field(default="", alias="LastIOError")
    seconds_behind_master: NullInt64 = Field(default_factory=NullInt64)
    sql_delay: StrictInt = Field(default=0, alias="SQLDelay")
    executed_gtid_set: StrictStr = ""
    gtid_purged: StrictStr = ""
    gtid_errant: StrictStr = ""

    slave_lag_seconds: NullInt64 = Field(default_factory=NullInt64)
    replication_lag_seconds: NullInt64 = Field(default_factory=NullInt64)
    # InstanceKeyMap is serialized as a JSON array of keys.
    slave_hosts: List[InstanceKey] = Field(default_factory=list)
    replicas: List[InstanceKey] = Field(default_factory=list)
    cluster_name: StrictStr = ""
    suggested_cluster_alias: StrictStr = ""
    data_center: StrictStr = ""
    region: StrictStr = ""
    physical_environment: StrictStr = ""
    replication_depth: StrictInt = 0
    is_co_master: StrictBool = False
    has_replication_credentials: StrictBool = False
    replication_credentials_available: StrictBool = False
    semi_sync_available: StrictBool = False
    semi_sync_priority: StrictInt = 0
    semi_sync_master_plugin_new_version: StrictBool = False
    semi_sync_replica_plugin_new_version: StrictBool = False
    semi_sync_master_enabled: StrictBool = False
    semi_sync_replica_enabled: StrictBool = False
    semi_sync_master_timeout: StrictInt = 0
    semi_sync_master_wait_for_replica_count: StrictInt = 0
    semi_sync_master_status: StrictBool = False
    semi_sync_master_clients: StrictInt = 0
    semi_sync_replica_status: StrictBool = False

    last_seen_timestamp: StrictStr = ""
    is_last_check_valid: StrictBool = False
    is_up_to_date: StrictBool = False
    is_recently_checked: StrictBool = False
    seconds_since_last_seen: NullInt64 = Field(default_factory=NullInt64)
    count_mysql_snapshots: StrictInt = Field(default=0, alias="CountMySQLSnapshots")

    is_candidate: StrictBool = False
    promotion_rule: Union[CandidatePromotionRule, StrictStr] = Field(
        default=CandidatePromotionRule.NEUTRAL, union_mode="left_to_right"
    )
    is_downtimed: StrictBool = False
    downtime_reason: StrictStr = ""
    downtime_owner: StrictStr = ""
    downtime_end_timestamp: StrictStr = ""
    # Go time.Duration, nanoseconds.
    elapsed_downtime: StrictInt = 0
    unresolved_hostname: StrictStr = ""
    allow_tls: StrictBool = Field(default=False, alias="AllowTLS")

    problems: List[StrictStr] = Field(default_factory=list)

    last_discovery_latency: StrictInt = 0

    replication_group_name: StrictStr = ""
    replication_group_is_single_primary: StrictBool = False
    replication_group_member_state: StrictStr = ""
    replication_group_member_role: StrictStr = ""
    replication_group_members: List[InstanceKey] = Field(default_factory=list)
    replication_group_primary_instance_key: InstanceKey = Field(
        default_factory=InstanceKey
    )


class ClusterInfo(OrchestratorModel):
    cluster_name: StrictStr = ""
    cluster_alias: StrictStr = ""
    cluster_domain: StrictStr = ""
    count_instances: StrictInt = 0
    heuristic_lag: StrictInt = 0
    has_automated_master_recovery: StrictBool = False
    has_automated_intermediate_master_recovery: StrictBool = False


PoolInstancesMap = Dict[str, List[InstanceKey]]


class ReplicationAnalysis(OrchestratorModel):
    analyzed_instance_key: InstanceKey = Field(default_factory=InstanceKey)
    analyzed_instance_master_key: InstanceKey = Field(default_factory=InstanceKey)
    cluster_details: ClusterInfo = Field(default_factory=ClusterInfo)
    analysis: StrictStr = ""
    description: StrictStr = ""
    structure_analysis: List[StrictStr] = Field(default_factory=list)
    is_master: StrictBool = False
    is_co_master: StrictBool = False
    last_check_valid: StrictBool = False
    last_check_partial_success: StrictBool = False
    count_replicas: StrictInt = 0
    count_valid_replicas: StrictInt = 0
    count_valid_replicating_replicas: StrictInt = 0
    count_replicas_failing_to_connect_to_master: StrictInt = 0
    count_downtimed_replicas: StrictInt = 0
    replication_depth: StrictInt = 0
    is_downtimed: StrictBool = False
    is_replicas_downtimed: StrictBool = False
    downtime_end_timestamp: StrictStr = ""
    downtime_remaining_seconds: StrictInt = 0
    is_binlog_server: StrictBool = False
    pseudo_gtid_immediate_topology: StrictBool = Field(
        default=False, alias="PseudoGTIDImmediateTopology"
    )
    oracle_gtid_immediate_topology: StrictBool = Field(
        default=False, alias="OracleGTIDImmediateTopology"
    )
    mariadb_gtid_immediate_topology: StrictBool = Field(
        default=False, alias="MariaDBGTIDImmediateTopology"
    )
    binlog_server_immediate_topology: StrictBool = False
    semi_sync_master_enabled: StrictBool = False
    semi_sync_master_status: StrictBool = False
    semi_sync_master_wait_for_replica_count: StrictInt = 0
    semi_sync_master_clients: StrictInt = 0
    count_semi_sync_replicas_enabled: StrictInt = 0
    is_actionable_recovery: StrictBool = False
    processing_node_hostname: StrictStr = ""
    processing_node_token: StrictStr = ""
    count_additional_agreeing_nodes: StrictInt = 0
    start_active_period: StrictStr = ""
    skippable_due_to_downtime: StrictBool = False
    gtid_mode: StrictStr = Field(default="", alias="GTIDMode")
    min_replica_gtid_mode: StrictStr = Field(default="", alias="MinReplicaGTIDMode")
    max_replica_gtid_mode: StrictStr = Field(default="", alias="MaxReplicaGTIDMode")
    max_replica_gtid_errant: StrictStr = Field(default="", alias="MaxReplicaGTIDErrant")
    command_hint: StrictStr = ""
    is_read_only: StrictBool = False


class TopologyRecovery(OrchestratorModel):
    id: StrictInt = 0
    uid: StrictStr = Field(default="", alias="UID")
    analysis_entry: ReplicationAnalysis = Field(default_factory=ReplicationAnalysis)
    successor_key: Optional[InstanceKey] = None
    successor_alias: StrictStr = ""
    successor_binlog_coordinates: Optional[BinlogCoordinates] = None
    is_active: StrictBool = False
    is_successful: StrictBool = False
    lost_replicas: List[InstanceKey] = Field(default_factory=list)
    participating_instance_keys: List[InstanceKey] = Field(default_factory=list)
    all_errors: List[StrictStr] = Field(default_factory=list)
    recovery_start_timestamp: StrictStr = ""
    recovery_end_timestamp: StrictStr = ""
    processing_node_hostname: StrictStr = ""
    processing_node_token: StrictStr = ""
    acknowledged: StrictBool = False
    acknowledged_at: StrictStr = ""
    acknowledged_by: StrictStr = ""
    acknowledged_comment: StrictStr = ""
    last_detection_id: StrictInt = 0
    related_recovery_id: StrictInt = 0
    type: StrictStr = ""
    recovery_type: StrictStr = ""


class RecoveryStep(OrchestratorModel):
    recovery_uid: StrictStr = Field(default="", alias="RecoveryUID")
    audit_at: StrictStr = ""
    message: StrictStr = ""


class BlockedTopologyRecovery(OrchestratorModel):
    failed_instance_key: InstanceKey = Field(default_factory=InstanceKey)
    cluster_name: StrictStr = ""
    analysis: StrictStr = ""
    blocking_recovery_id: StrictInt = 0
    blocking_recovery: Optional[TopologyRecovery] = None


class AutomatedRecoveryFilter(OrchestratorModel):
    pattern: StrictStr = ""
    is_promotion: StrictBool = False


class Maintenance(OrchestratorModel):
    maintenance_id: StrictInt = 0
    key: InstanceKey = Field(default_factory=InstanceKey)
    begin_timestamp: StrictStr = ""
    seconds_elapsed: StrictInt = 0
    is_active: StrictBool = False
    owner: StrictStr = ""
    reason: StrictStr = ""


class AgentLogicalVolume(OrchestratorModel):
    name: StrictStr = ""
    is_active: StrictBool = False
    has_snapshot: StrictBool = False
    snapshot_name: StrictStr = ""
    data_path: StrictStr = ""
    snapshot_path: StrictStr = ""
    mysql_port: StrictInt = Field(default=0, alias="MySQLPort")
    mysql_data_path: StrictStr = Field(default="", alias="MySQLDataPath")
    mysql_disk_path: StrictStr = Field(default="", alias="MySQLDiskPath")
    file_system: StrictStr = ""


class Agent(OrchestratorModel):
    hostname: StrictStr = ""
    port: StrictInt = 0
    last_submitted: StrictStr = ""
    available_local_snapshots: List[StrictStr] = Field(default_factory=list)
    available_snapshot_hosts: List[StrictStr] = Field(default_factory=list)
    total_seconds_unavailable: StrictInt = 0
    available_disk_space_ratio: StrictFloat = 0.0
    logical_volume: Optional[AgentLogicalVolume] = None


class AgentSeed(OrchestratorModel):
    seed_id: StrictInt = 0
    target_hostname: StrictStr = ""
    source_hostname: StrictStr = ""
    start_timestamp: StrictStr = ""
    end_timestamp: StrictStr = ""
    is_complete: StrictBool = False
    is_successful: StrictBool = False


class AgentSeedState(OrchestratorModel):
    seed_id: StrictInt = 0
    state_timestamp: StrictStr = ""
    state: StrictStr = ""
    error_message: StrictStr = ""


class AuditEntry(OrchestratorModel):
    audit_id: StrictInt = 0
    audit_timestamp: StrictStr = ""
    audit_type: StrictStr = ""
    audit_instance_key: InstanceKey = Field(default_factory=InstanceKey)
    message: StrictStr = ""


class HostnameResolveCache(OrchestratorModel):
    hostname: StrictStr = ""
    resolved_hostname: StrictStr = ""


class Tag(OrchestratorModel):
    tag_name: StrictStr = ""
    tag_value: StrictStr = ""

    @model_validator(mode="before")
    @classmethod
    def _from_string(cls, data: Any) -> Any:
        # Some endpoints list tags as "name=value" strings.
        if isinstance(data, str):
            name, _, value = data.partition("=")
            return {"TagName": name, "TagValue": value}
        return data

    def __str__(self) -> str:
        return f"{self.tag_name}={self.tag_value}" if self.tag_value else self.tag_name


class DiscoveryMetric(OrchestratorModel):
    timestamp: StrictStr = ""
    instance_key: InstanceKey = Field(default_factory=InstanceKey)
    duration_millis: StrictInt = 0


class DiscoveryQueueMetric(OrchestratorModel):
    timestamp: StrictStr = ""
    queue_name: StrictStr = ""
    queue_length: StrictInt = 0


class BackendQueryMetric(OrchestratorModel):
    timestamp: StrictStr = ""
    query: StrictStr = ""
    duration_millis: StrictInt = 0


class WriteBufferMetric(OrchestratorModel):
    timestamp: StrictStr = ""
    buffer_size: StrictInt = 0


class RaftMembershipHealth(OrchestratorModel):
    healthy: StrictBool = False
    reason: StrictStr = ""


class RaftFollowerHealthReport(OrchestratorModel):
    hostname: StrictStr = ""
    token: StrictStr = ""
    raft_bind: StrictStr = ""
    raft_advertise: StrictStr = ""
    is_available: StrictBool = False
    availability_reason: StrictStr = ""


class RaftState(OrchestratorModel):
    leader: StrictStr = ""
    peer: StrictStr = ""
    peers: List[StrictStr] = Field(default_factory=list)
    is_leader: StrictBool = False
    is_follower: StrictBool = False
    state: StrictStr = ""


__all__ = [
    "InvalidInstanceKeyError",
    "OrchestratorModel",
    "InstanceKey",
    "NullInt64",
    "BinlogType",
    "ReplicationThreadState",
    "CandidatePromotionRule",
    "BinlogCoordinates",
    "Instance",
    "ClusterInfo",
    "PoolInstancesMap",
    "ReplicationAnalysis",
    "TopologyRecovery",
    "RecoveryStep",
    "BlockedTopologyRecovery",
    "AutomatedRecoveryFilter",
    "Maintenance",
    "AgentLogicalVolume",
    "Agent",
    "AgentSeed",
    "AgentSeedState",
    "AuditEntry",
    "HostnameResolveCache",
    "Tag",
    "DiscoveryMetric",
    "DiscoveryQueueMetric",
    "BackendQueryMetric",
    "WriteBufferMetric",
    "RaftMembershipHealth",
    "RaftFollowerHealthReport",
    "RaftState",
]
