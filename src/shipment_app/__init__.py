"""Packaged data for the shipment packing engine."""
