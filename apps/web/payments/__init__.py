"""Payments module - Yoco and PayFast integration for online ordering."""
