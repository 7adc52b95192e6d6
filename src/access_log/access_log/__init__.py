"""RFID access log package.

Organized by feature modules (users, logs, scans) with a thin Flask
controller layer over service and record-store layers.
"""
