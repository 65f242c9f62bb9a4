from token_kernel.testing.fixtures import frozen_clock, rsa_keys, secret  # noqa: F401
