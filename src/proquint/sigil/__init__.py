"""
Sigil - Name identity and commitments.

- codec:      proquint <-> 4-byte name id
- commitment: commit-reveal payloads and age windows
- eth:        wallet address derivation
"""
