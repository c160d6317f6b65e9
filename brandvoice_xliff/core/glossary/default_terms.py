"""
Built-in glossary.

category -> {term as it appears in the source: canonical form in the output}
"""

DEFAULT_GLOSSARY = {
    'brand_terms': {
        'Nests Hostels': 'Nests Hostels',
        'Las Eras Nest': 'Las Eras Nest',
        'NEST PASS': 'NEST PASS',
        'Nest Pass month': 'Nest Pass month',
        'Nest Pass week': 'Nest Pass week',
        'Duque Nest': 'Duque Nest',
        'Medano Nest': 'Medano Nest',
        'Nests': 'Nests',
        'Nest': 'Nest',
        'NestsHostels': 'NestsHostels',
        'nestshostels.com': 'nestshostels.com',
        'nestshostels.cloudbeds.com': 'nestshostels.cloudbeds.com',
    },
    'locations': {
        'Costa Adeje': 'Costa Adeje',
        'Las Eras': 'Las Eras',
        'Playa del Duque': 'Playa del Duque',
        'Santa Cruz de Tenerife': 'Santa Cruz de Tenerife',
        'El Médano': 'El Médano',
        'Los Cristianos': 'Los Cristianos',
    },
    'technical_terms': {
        'WordPress': 'WordPress',
        'WPML': 'WPML',
        'Instagram': 'Instagram',
        'Facebook': 'Facebook',
        'WhatsApp': 'WhatsApp',
        'Google Maps': 'Google Maps',
        'TripAdvisor': 'TripAdvisor',
        'Hostelworld': 'Hostelworld',
    },
}
