from .configs import (
    CONFIG_TYPES,
    AcesDeucesConfig,
    ArniesConfig,
    BankerConfig,
    BestBallConfig,
    BingoBangoBongoConfig,
    CtpConfig,
    DotsConfig,
    HeadToHeadConfig,
    KeepScoreConfig,
    NassauConfig,
    NinesConfig,
    QuotaConfig,
    RabbitConfig,
    ScotchConfig,
    SixesConfig,
    SkinsConfig,
    SnakeConfig,
    StablefordConfig,
    TaxManConfig,
    TroubleConfig,
    VegasConfig,
    WolfConfig,
    config_from_mapping,
    config_to_mapping,
    invalid_config_fields,
)
from .types import (
    HOLES,
    ActiveMode,
    AuxState,
    BankerHole,
    BingoBangoBongoHole,
    CombinedResult,
    DotsHole,
    ForensicArtifact,
    GameSetup,
    ModeResult,
    ModeTag,
    Player,
    PressMatch,
    PressSegment,
    TeamRoster,
    Transfer,
    TroubleType,
    ValidationError,
    ValidationIssue,
    ValidationResult,
    WolfDeclaration,
    WolfHole,
    WolfTieBreak,
)

__all__ = [
    "CONFIG_TYPES",
    "HOLES",
    "AcesDeucesConfig",
    "ActiveMode",
    "ArniesConfig",
    "AuxState",
    "BankerConfig",
    "BankerHole",
    "BestBallConfig",
    "BingoBangoBongoConfig",
    "BingoBangoBongoHole",
    "CombinedResult",
    "CtpConfig",
    "DotsConfig",
    "DotsHole",
    "ForensicArtifact",
    "GameSetup",
    "HeadToHeadConfig",
    "KeepScoreConfig",
    "ModeResult",
    "ModeTag",
    "NassauConfig",
    "NinesConfig",
    "Player",
    "PressMatch",
    "PressSegment",
    "QuotaConfig",
    "RabbitConfig",
    "ScotchConfig",
    "SixesConfig",
    "SkinsConfig",
    "SnakeConfig",
    "StablefordConfig",
    "TaxManConfig",
    "TeamRoster",
    "Transfer",
    "TroubleConfig",
    "TroubleType",
    "ValidationError",
    "ValidationIssue",
    "ValidationResult",
    "VegasConfig",
    "WolfConfig",
    "WolfDeclaration",
    "WolfHole",
    "WolfTieBreak",
    "config_from_mapping",
    "config_to_mapping",
    "invalid_config_fields",
]
