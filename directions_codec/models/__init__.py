from .criteria import (
    AmenityType,
    Annotation,
    Approach,
    Destination,
    Exclude,
    Geometries,
    Include,
    Overview,
    PaymentMethod,
    Profile,
    Source,
    TrafficTendency,
    VoiceUnit,
    is_valid_criteria,
    parse_criteria,
)
