"""Creative work critique backend"""
