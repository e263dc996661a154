"""Loyalty analytics: customer segmentation and dashboard metrics."""
