from .viacep_lookup import ViaCepAddressLookup

__all__ = ["ViaCepAddressLookup"]
