__all__ = [
    # Codec
    "ProquintError",
    "InvalidProquint",
    "InvalidProquintLength",
    "encode",
    "decode",
    "encode_half",
    "decode_half",
    "normalize",
    "is_palindrome",
    "is_valid_cvcvc",
    "validate_proquint",
    "canonicalize",
    "random_name",
    "to_bytes4",
    "to_hex",
    "to_token_id",
    # Pricing
    "PriceQuote",
    "YearsOutOfRange",
    "validate_years",
    "registration_price",
    "quote",
    "refund_amount",
    "burn_reward",
    "receiver_share",
    "format_eth",
    # Lifecycle
    "RegistrationPhase",
    "InboxPhase",
    "Availability",
    "ActionNotAllowed",
    "registration_phase",
    "availability",
    "apply_transfer_penalty",
    "is_in_inbox",
    "inbox_phase",
    "window_seconds",
    "predict_inbox_expiry",
    "can_accept",
    "can_refund",
    "can_burn",
    "can_shelve",
    # Commitment
    "Commitment",
    "CommitmentState",
    "CommitmentStatus",
    "CommitmentError",
    "CommitmentNotYetReady",
    "CommitmentExpired",
    "CommitmentNotConfirmed",
    "CommitmentNotFound",
    "generate_secret",
    "pack_registration_input",
    "pack_renew_input",
    "compute_commitment_hash",
    "make_commitment",
    "select_recipient",
    "commitment_status",
    "ensure_revealable",
    # Store
    "CommitmentStore",
    "MemoryCommitmentStore",
    "FileCommitmentStore",
    # Config
    "AppConfig",
    "PRESETS",
    "load_config",
]

from .sigil.codec import (
    InvalidProquint,
    InvalidProquintLength,
    ProquintError,
    canonicalize,
    decode,
    decode_half,
    encode,
    encode_half,
    is_palindrome,
    is_valid_cvcvc,
    normalize,
    random_name,
    to_bytes4,
    to_hex,
    to_token_id,
    validate_proquint,
)
from .ledger.pricing import (
    PriceQuote,
    YearsOutOfRange,
    burn_reward,
    format_eth,
    quote,
    receiver_share,
    refund_amount,
    registration_price,
    validate_years,
)
from .ledger.lifecycle import (
    ActionNotAllowed,
    Availability,
    InboxPhase,
    RegistrationPhase,
    apply_transfer_penalty,
    availability,
    can_accept,
    can_burn,
    can_refund,
    can_shelve,
    inbox_phase,
    is_in_inbox,
    predict_inbox_expiry,
    registration_phase,
    window_seconds,
)
from .sigil.commitment import (
    Commitment,
    CommitmentError,
    CommitmentExpired,
    CommitmentNotConfirmed,
    CommitmentNotFound,
    CommitmentNotYetReady,
    CommitmentState,
    CommitmentStatus,
    commitment_status,
    compute_commitment_hash,
    ensure_revealable,
    generate_secret,
    make_commitment,
    pack_registration_input,
    pack_renew_input,
    select_recipient,
)
from .store import CommitmentStore, FileCommitmentStore, MemoryCommitmentStore
from .config import PRESETS, AppConfig, load_config
