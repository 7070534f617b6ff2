"""Shared Kernel module.

Components shared across bounded contexts: tenant scope resolution and the
outbox contracts used to emit lifecycle events. Changes here affect every
context that depends on them.
"""
