"""Domain core: exceptions, security helpers, AI gateway and realtime presence."""
