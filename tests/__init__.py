"""Tests for chainseq."""
