# Copyright (c) Syntropy Systems
"""memobench CLI."""
