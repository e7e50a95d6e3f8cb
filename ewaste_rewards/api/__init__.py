"""HTTP API for the e-waste rewards backend"""
