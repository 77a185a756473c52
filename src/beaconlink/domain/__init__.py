# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Domain layer: orbit synthesis, geometry and the handshake/blackout engine.

Modules here depend only on the standard library and numpy. The SGP4
propagator and the relay catalog are reached through ports.
"""
