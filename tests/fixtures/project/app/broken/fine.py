class StillFound:
    pass
