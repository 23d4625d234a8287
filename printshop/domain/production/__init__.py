"""Production domain - typesetting, proofs and processing options"""
