"""
Theurgy - Command implementations for the proquint CLI.

- names:    encode, decode, random, quote
- windows:  refund, inbox-window, lifecycle
- register: commit, confirm, status, reveal, commitments
- inbox:    renew, accept, reject, burn, shelve, transfer
- divine:   query on-chain status of a name
"""
