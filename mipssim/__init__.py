"""A simulator for a subset of MIPS assembly that runs each instruction through five datapath stages."""

__version__ = "0.1.0"