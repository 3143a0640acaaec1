from .payloads import payload_to_wire, payload_from_wire
from .codec import utc_timestamp, decode_envelope, envelope_to_wire, serialize_envelope

__all__ = [
    "decode_envelope",
    "envelope_to_wire",
    "payload_from_wire",
    "payload_to_wire",
    "serialize_envelope",
    "utc_timestamp",
]
