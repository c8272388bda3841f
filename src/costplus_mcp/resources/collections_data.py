"""Static catalogue of Cost Plus Drugs medication collections.

Each entry is ``(id, name, slug)``; ``id`` is the storefront global ID, the
base64 encoding of ``"Collection:{n}"``.
"""

from typing import Tuple

COLLECTIONS: Tuple[Tuple[str, str, str], ...] = (
    ("Q29sbGVjdGlvbjox", "All Medications", "all-medications"),
    ("Q29sbGVjdGlvbjoy", "Acid Reflux", "acid-reflux"),
    ("Q29sbGVjdGlvbjo0", "Alcohol Dependence", "alcohol-dependence"),
    ("Q29sbGVjdGlvbjo1", "Allergies", "allergies"),
    ("Q29sbGVjdGlvbjo2", "ALS", "als"),
    ("Q29sbGVjdGlvbjo3", "Angina", "angina"),
    ("Q29sbGVjdGlvbjo4", "Anti-bacterial", "anti-bacterial"),
    ("Q29sbGVjdGlvbjo5", "Anti-fungal", "anti-fungal"),
    ("Q29sbGVjdGlvbjoxMA==", "Antihyperlipidemic", "antihyperlipidemic"),
    ("Q29sbGVjdGlvbjoxMQ==", "Anti-Inflammation", "anti-inflammation"),
    ("Q29sbGVjdGlvbjoxMg==", "Antimalarial", "antimalarial"),
    ("Q29sbGVjdGlvbjoxMw==", "Anti-Parasitic", "anti-parasitic"),
    ("Q29sbGVjdGlvbjoxNA==", "Anti-viral", "anti-viral"),
    ("Q29sbGVjdGlvbjoxNQ==", "Arrhythmia", "arrhythmia"),
    ("Q29sbGVjdGlvbjoxNg==", "Arthritis", "arthritis"),
    ("Q29sbGVjdGlvbjoxNw==", "Asthma/COPD", "asthma/copd"),
    ("Q29sbGVjdGlvbjoxOA==", "Birth Control", "birth-control"),
    ("Q29sbGVjdGlvbjoxOQ==", "Blood Thinner", "blood-thinner"),
    ("Q29sbGVjdGlvbjoyMA==", "Bone Health", "bone-health"),
    ("Q29sbGVjdGlvbjoyMQ==", "Breast Cancer", "breast-cancer"),
    ("Q29sbGVjdGlvbjoyMg==", "Burns", "burns"),
    ("Q29sbGVjdGlvbjoyMw==", "Cancer", "cancer"),
    ("Q29sbGVjdGlvbjoyNA==", "Chronic Dry Eye", "chronic-dry-eye"),
    ("Q29sbGVjdGlvbjoyNQ==", "Colonoscopy Preparation", "colonoscopy-preparation"),
    ("Q29sbGVjdGlvbjoyNg==", "Constipation", "constipation"),
    ("Q29sbGVjdGlvbjoyNw==", "Cough", "cough"),
    ("Q29sbGVjdGlvbjoyOA==", "Crohn's Disease", "crohn's-disease"),
    ("Q29sbGVjdGlvbjoyOQ==", "Dementia", "dementia"),
    ("Q29sbGVjdGlvbjozMA==", "Dental Care", "dental-care"),
    ("Q29sbGVjdGlvbjozMQ==", "Diabetes", "diabetes"),
    ("Q29sbGVjdGlvbjozMg==", "Diuretic", "diuretic"),
    ("Q29sbGVjdGlvbjozMw==", "Endometriosis", "endometriosis"),
    ("Q29sbGVjdGlvbjozNA==", "Erectile Dysfunction", "erectile-dysfunction"),
    ("Q29sbGVjdGlvbjozNQ==", "Eye Health", "eye-health"),
    ("Q29sbGVjdGlvbjozNg==", "Fertility", "fertility"),
    ("Q29sbGVjdGlvbjozNw==", "Gallstone", "gallstone"),
    ("Q29sbGVjdGlvbjozOA==", "Gastrointestinal", "gastrointestinal"),
    ("Q29sbGVjdGlvbjozOQ==", "Glaucoma", "glaucoma"),
    ("Q29sbGVjdGlvbjo0MA==", "Gout", "gout"),
    ("Q29sbGVjdGlvbjo0MQ==", "Hair & Skin Health", "hair-&-skin-health"),
    ("Q29sbGVjdGlvbjo0Mg==", "Heart Failure", "heart-failure"),
    ("Q29sbGVjdGlvbjo0Mw==", "Heart Health", "heart-health"),
    ("Q29sbGVjdGlvbjo0NA==", "Hemorrhage", "hemorrhage"),
    ("Q29sbGVjdGlvbjo0NQ==", "Hemorrhoids", "hemorrhoids"),
    ("Q29sbGVjdGlvbjo0Ng==", "High Blood Pressure", "high-blood-pressure"),
    ("Q29sbGVjdGlvbjo0Nw==", "High Cholesterol", "high-cholesterol"),
    ("Q29sbGVjdGlvbjo0OA==", "High Potassium", "high-potassium"),
    ("Q29sbGVjdGlvbjo0OQ==", "HIV", "hiv"),
    ("Q29sbGVjdGlvbjo1MA==", "Hormone Therapy", "hormone-therapy"),
    ("Q29sbGVjdGlvbjo1MQ==", "Huntington's Disease", "huntington's-disease"),
    ("Q29sbGVjdGlvbjo1Mg==", "Hyponatremia", "hyponatremia"),
    ("Q29sbGVjdGlvbjo1Mw==", "Incontinence", "incontinence"),
    ("Q29sbGVjdGlvbjo1NA==", "Infection", "infection"),
    ("Q29sbGVjdGlvbjo1NQ==", "Insomnia", "insomnia"),
    ("Q29sbGVjdGlvbjo1Ng==", "Iron Overload", "iron-overload"),
    ("Q29sbGVjdGlvbjo1Nw==", "Kidney Disease", "kidney-disease"),
    ("Q29sbGVjdGlvbjo1OA==", "Leukemia", "leukemia"),
    ("Q29sbGVjdGlvbjo1OQ==", "Low Blood Pressure", "low-blood-pressure"),
    ("Q29sbGVjdGlvbjo2MA==", "Low Blood Sugar", "low-blood-sugar"),
    ("Q29sbGVjdGlvbjo2MQ==", "Low Potassium", "low-potassium"),
    ("Q29sbGVjdGlvbjo2Mg==", "Men's Health", "men's-health"),
    ("Q29sbGVjdGlvbjo2Mw==", "Mental Health", "mental-health"),
    ("Q29sbGVjdGlvbjo2NA==", "Migraines", "migraines"),
    ("Q29sbGVjdGlvbjo2NQ==", "Multiple sclerosis", "multiple-sclerosis"),
    ("Q29sbGVjdGlvbjo2Ng==", "Muscle Relaxants", "muscle-relaxants"),
    ("Q29sbGVjdGlvbjo2Nw==", "Musculoskeletal", "musculoskeletal"),
    ("Q29sbGVjdGlvbjo2OA==", "Nausea", "nausea"),
    ("Q29sbGVjdGlvbjo2OQ==", "Neurological", "neurological"),
    ("Q29sbGVjdGlvbjo3MA==", "Opioid Dependence", "opioid-dependence"),
    ("Q29sbGVjdGlvbjo3MQ==", "Oral Health", "oral-health"),
    ("Q29sbGVjdGlvbjo3Mg==", "Organ Transplant", "organ-transplant"),
    ("Q29sbGVjdGlvbjo3Mw==", "Overactive Bladder", "overactive-bladder"),
    ("Q29sbGVjdGlvbjo3NA==", "Pain & Inflammation", "pain-&-inflammation"),
    ("Q29sbGVjdGlvbjo3NQ==", "Pain & Nausea", "pain-&-nausea"),
    ("Q29sbGVjdGlvbjo3Ng==", "Parkinson's Disease", "parkinson's-disease"),
    ("Q29sbGVjdGlvbjo3Nw==", "Phenylketonuria", "phenylketonuria"),
    ("Q29sbGVjdGlvbjo3OA==", "Prostate", "prostate"),
    ("Q29sbGVjdGlvbjo3OQ==", "Pulmonary Fibrosis", "pulmonary-fibrosis"),
    ("Q29sbGVjdGlvbjo4MA==", "Restless Leg Syndrome", "restless-leg-syndrome"),
    ("Q29sbGVjdGlvbjo4MQ==", "Rheumatoid Arthritis", "rheumatoid-arthritis"),
    ("Q29sbGVjdGlvbjo4Mg==", "Seizures", "seizures"),
    ("Q29sbGVjdGlvbjo4Mw==", "Sleep Aid", "sleep-aid"),
    ("Q29sbGVjdGlvbjo4NA==", "Smoking Cessation", "smoking-cessation"),
    ("Q29sbGVjdGlvbjo4NQ==", "Steroid", "steroid"),
    ("Q29sbGVjdGlvbjo4Ng==", "Stroke Prevention", "stroke-prevention"),
    ("Q29sbGVjdGlvbjo4Nw==", "Thrombocytopenia", "thrombocytopenia"),
    ("Q29sbGVjdGlvbjo4OA==", "Thyroid", "thyroid"),
    ("Q29sbGVjdGlvbjo4OQ==", "Urea Cycle Disorders", "urea-cycle-disorders"),
    ("Q29sbGVjdGlvbjo5MA==", "Urinary Symptoms", "urinary-symptoms"),
    ("Q29sbGVjdGlvbjo5MQ==", "Vascular Disease", "vascular-disease"),
    ("Q29sbGVjdGlvbjo5Mg==", "Vitamin Deficiency", "vitamin-deficiency"),
    ("Q29sbGVjdGlvbjo5Mw==", "Weight Management", "weight-management"),
    ("Q29sbGVjdGlvbjo5NA==", "Wilson Disease", "wilson-disease"),
    ("Q29sbGVjdGlvbjo5NQ==", "Women's Health", "women's-health"),
)
