"""Static constants and lookup tables for dep-auditor."""

from __future__ import annotations

# Matched against the lowercased "group:artifact" pair.
ESSENTIAL_FAMILIES = [
    "kotlin-stdlib",
    "kotlin-reflect",
    "androidx.core",
    "androidx.appcompat",
    "androidx.activity",
    "androidx.fragment",
    "androidx.lifecycle",
    "com.google.android.material",
    "androidx.compose.ui",
    "androidx.compose.runtime",
]

# Matched against the lowercased artifact name.
LARGE_UTILITY_FAMILIES = [
    "guava",
    "commons-lang",
    "commons-collections",
    "commons-io",
    "commons-math",
    "commons-text",
    "joda-time",
    "vavr",
]

FRAMEWORK_FAMILIES = [
    # networking
    "okhttp",
    "retrofit",
    "volley",
    "ktor-client",
    # dependency injection
    "dagger",
    "hilt",
    "koin",
    "guice",
    # persistence
    "room",
    "realm",
    "sqldelight",
    "greendao",
    # concurrency
    "coroutines",
    "rxjava",
    "rxkotlin",
    "rxandroid",
]

HEURISTIC_RULES = {
    "essential": {"confidence": 100, "size_mb": 0.1},
    "test": {"confidence": 90, "size_mb": 0.1},
    "large_utility": {"confidence": 75, "size_mb": 4.5},
    "framework": {"confidence": 85, "size_mb": 2.5},
    "unknown": {"confidence": 50, "size_mb": 1.5},
}

# Evidence-based size estimates, first matching artifact fragment wins.
ARTIFACT_SIZE_TABLE = [
    ("tensorflow-lite", 9.2),
    ("play-services", 6.8),
    ("firebase", 5.6),
    ("exoplayer", 5.3),
    ("media3", 5.1),
    ("guava", 3.1),
    ("rxjava", 2.7),
    ("kotlin-stdlib", 1.7),
    ("jackson-databind", 1.6),
    ("kotlinx-coroutines", 1.4),
    ("material", 1.2),
    ("room", 0.9),
    ("okhttp", 0.8),
    ("commons-lang3", 0.6),
    ("gson", 0.3),
    ("dagger", 0.2),
    ("retrofit", 0.1),
    ("junit", 0.4),
]

DEFAULT_SIZE_MB = 1.5
EVIDENCE_ABSENT_CONFIDENCE = 90

HIGH_IMPACT_SIZE_MB = 5.0
REVIEW_SIZE_MB = 2.0

# Substring markers for configuration-kind detection, checked in this order.
TEST_MARKERS = ("test",)
DEBUG_MARKERS = ("debug",)
ANNOTATION_PROCESSOR_MARKERS = ("annotationProcessor", "kapt", "ksp")
API_MARKERS = ("api(", "api (", "api '", 'api "')

CATEGORY_LABELS = {
    "ESSENTIAL": "Essential",
    "FRAMEWORK": "Framework",
    "TEST": "Test",
    "LIKELY_UNUSED": "Likely unused",
    "UNKNOWN": "Unknown",
}

RECOMMENDATION_LABELS = {
    "REMOVE_HIGH_IMPACT": "High impact: remove to save significant size",
    "REVIEW_LARGE": "Large dependency: review whether it is needed",
    "TEST_ONLY": "Test-only dependency: not shipped",
    "KEEP": "Keep",
}

CLASSIFY_MODES = ("auto", "heuristic", "evidence")
OUTPUT_FORMATS = ("table", "markdown", "json")
