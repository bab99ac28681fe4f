"""Résumé intake backend — applicant registration and résumé PDF publishing."""
