from csv_to_h3.services.session import H3Session

__all__ = ["H3Session"]
