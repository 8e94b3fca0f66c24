# sinkquote/models/enums.py
import enum


class MountingStyle(str, enum.Enum):
    undermount = "undermount"
    drop_in = "drop_in"
    farmhouse = "farmhouse"
    flush_mount = "flush_mount"


class InstallationType(str, enum.Enum):
    undermount = "undermount"
    top_mount = "top_mount"
    farmhouse_apron = "farmhouse_apron"
    seamless_undermount = "seamless_undermount"
    flush_mount = "flush_mount"


class BowlConfiguration(str, enum.Enum):
    single = "single"
    double_equal = "double_equal"
    large_small = "large_small"
    triple = "triple"
    bar = "bar"


class SinkMaterial(str, enum.Enum):
    stainless_steel = "stainless_steel"
    granite_composite = "granite_composite"
    quartz_composite = "quartz_composite"
    cast_iron = "cast_iron"
    fireclay = "fireclay"
    copper = "copper"
    porcelain = "porcelain"


class CountertopMaterial(str, enum.Enum):
    granite = "granite"
    quartz = "quartz"
    marble = "marble"
    laminate = "laminate"
    solid_surface = "solid_surface"
    butcher_block = "butcher_block"
    concrete = "concrete"
    tile = "tile"
    stainless_steel = "stainless_steel"
    other = "other"


class ExistingSinkMaterial(str, enum.Enum):
    cast_iron = "cast_iron"
    stainless_steel = "stainless_steel"
    composite = "composite"
    unknown = "unknown"


class CabinetIntegrity(str, enum.Enum):
    good = "good"
    questionable = "questionable"
    compromised = "compromised"


class QuoteStatus(str, enum.Enum):
    draft = "draft"
    sent = "sent"
    viewed = "viewed"
    accepted = "accepted"
    rejected = "rejected"
    expired = "expired"


class LineItemType(str, enum.Enum):
    product = "product"
    labor = "labor"
    material = "material"
    other = "other"
