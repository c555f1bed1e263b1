import attrs


@attrs.define
class BeaconData:
    """Everything a fire-and-forget release needs: no headers, just a URL and a body"""

    url: str
    payload: bytes
