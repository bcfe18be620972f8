"""Tensor operation mixins, one subpackage per operation family."""
