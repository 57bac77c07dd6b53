"""Infrastructure layer: configuration, logging and registry access"""
