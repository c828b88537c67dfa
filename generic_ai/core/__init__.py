"""Configuration, logging, telemetry and errors"""
