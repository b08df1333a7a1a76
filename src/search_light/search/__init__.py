"""
In-memory search and filter engine.

This package provides the pieces a ``SearchLight`` builder is assembled from:
- collection: normalizes sequence/mapping input into an ordered key -> item store
- constraints: accumulates search text, filters and searched keys
- operators: loose/strict equality and relational comparisons
- relevance: subject building and per-item scoring
- classifier: dirty-tracked full/partial bucketing
- sorting: relevance ordering and custom comparators
- formatter: conversion back to the original collection shape
"""
