"""Sample notebook content for demos: a few protocols, experiments, measurements and notes."""
import datetime as dt
import random
from typing import Dict, Optional

from loguru import logger

from services import card_notes as card_note_svc
from services import experiment_data as data_svc
from services import experiments as experiment_svc
from services import notes as note_svc
from services import protocols as protocol_svc
from services.backend import Backend

PROTOCOLS = [
    {
        'title': "PCR amplification",
        'category': 'molecular',
        'description': "Standard 30-cycle PCR for fragments under 2 kb.",
        'content': "1. Thaw reagents on ice\n2. Prepare master mix (buffer, dNTPs, primers, polymerase)\n"
                   "3. Add template DNA\n4. 95°C 2 min; 30x (95°C 30 s, 58°C 30 s, 72°C 1 min); 72°C 5 min\n"
                   "5. Hold at 4°C and check on a 1% agarose gel",
    },
    {
        'title': "HeLa cell passaging",
        'category': 'cell',
        'description': "Routine split of adherent HeLa cultures at 80-90% confluence.",
        'content': "1. Aspirate medium\n2. Rinse with PBS\n3. Add 1 mL trypsin-EDTA, 3 min at 37°C\n"
                   "4. Neutralise with 9 mL complete medium\n5. Seed new flasks at 1:5",
    },
    {
        'title': "Bradford protein assay",
        'category': 'analytical',
        'description': "Total protein quantification against a BSA standard curve.",
        'content': "1. Prepare BSA standards 0-2 mg/mL\n2. Mix 5 µL sample with 250 µL reagent\n"
                   "3. Incubate 10 min at room temperature\n4. Read absorbance at 595 nm",
    },
]

EXPERIMENTS = [
    {
        'title': "GFP plasmid amplification",
        'description': "Amplify the GFP insert for subcloning into the expression vector.",
        'status': 'completed',
        'protocol': "PCR amplification",
        'days_ago': 20,
        'length': 3,
    },
    {
        'title': "Drug response in HeLa",
        'description': "Track growth under three compound concentrations over one week.",
        'status': 'in_progress',
        'protocol': "HeLa cell passaging",
        'days_ago': 6,
        'length': None,
    },
    {
        'title': "Lysate protein yield",
        'description': "Compare protein yield between two lysis buffers.",
        'status': 'planning',
        'protocol': "Bradford protein assay",
        'days_ago': 0,
        'length': None,
    },
]

CARD_NOTES = [
    {'title': "Order more primers", 'content': "GFP-F and GFP-R are nearly out.",
     'category': 'general', 'color': '#ef4444', 'tags': ['ordering'], 'is_favorite': True},
    {'title': "Idea: time-lapse imaging", 'content': "Image the drug response plates every 6 h.",
     'category': 'ideas', 'color': '#3b82f6', 'tags': ['imaging', 'hela'], 'is_favorite': False},
    {'title': "Bradford reference", 'content': "Bradford, Anal. Biochem. 72:248 (1976).",
     'category': 'references', 'color': '#10b981', 'tags': ['assay'], 'is_favorite': False},
]


def seed_demo(backend: Backend, user_id: str, seed: Optional[int] = None) -> Dict[str, int]:
    """Write the sample notebook for ``user_id``. Returns how many records of each kind were created."""
    rng = random.Random(seed)
    now = dt.datetime.now()
    counts = {'protocols': 0, 'experiments': 0, 'experiment_data': 0, 'notes': 0, 'card_notes': 0}

    protocol_ids = {}
    for p in PROTOCOLS:
        protocol = protocol_svc.save_protocol(backend, user_id, p)
        protocol_ids[p['title']] = protocol.id
        counts['protocols'] += 1

    for e in EXPERIMENTS:
        start = now - dt.timedelta(days=e['days_ago'])
        exp = experiment_svc.save_experiment(backend, user_id, {
            'title': e['title'],
            'description': e['description'],
            'status': e['status'],
            'start_date': start.date(),
            'end_date': (start + dt.timedelta(days=e['length'])).date() if e['length'] else None,
            'protocol_id': protocol_ids.get(e['protocol']),
        })
        counts['experiments'] += 1

        for day in range(min(e['days_ago'], 5) + 1):
            stamp = start + dt.timedelta(days=day, hours=9)
            data_svc.save_data(backend, user_id, exp.id, {
                'data_type': 'temperature',
                'data_value': f"{rng.uniform(36.5, 37.5):.1f}",
                'measurement_unit': '°C',
                'timestamp': stamp,
            })
            data_svc.save_data(backend, user_id, exp.id, {
                'data_type': 'ph',
                'data_value': f"{rng.uniform(7.0, 7.6):.2f}",
                'measurement_unit': 'pH',
                'timestamp': stamp,
            })
            counts['experiment_data'] += 2

        note_svc.save_note(backend, user_id, exp.id, {
            'title': "Setup",
            'content': f"Started {e['title'].lower()} following the linked protocol.",
            'tags': ['setup'],
        })
        counts['notes'] += 1

    for n in CARD_NOTES:
        card_note_svc.save_card_note(backend, user_id, n)
        counts['card_notes'] += 1

    logger.info("Seeded demo notebook for {}: {}", user_id, counts)
    return counts
