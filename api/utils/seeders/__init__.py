from .emission_factor_seeder import seed_emission_factors

__all__ = ["seed_emission_factors"]
