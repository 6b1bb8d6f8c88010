from pydantic import BaseModel, computed_field


class AssetSnapshot(BaseModel):
    """24h price snapshot of an asset, values preformatted for display"""
    symbol: str
    price: str
    change_24h: str
    volume: str
    high_24h: str
    low_24h: str

    @computed_field
    @property
    def is_positive(self) -> bool:
        return float(self.change_24h) > 0
