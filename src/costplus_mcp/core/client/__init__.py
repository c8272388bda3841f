"""Resilient client for the Cost Plus Drugs GraphQL API.

Sub-modules (import from them directly):
    shared     – redaction and response parsing helpers
    dispatcher – RequestDispatcher: one HTTP attempt under a deadline
    retry      – RetryOrchestrator: bounded attempts with linear backoff
    graphql    – CostPlusGraphQLClient: the fixed storefront queries
    health     – HealthCheckAggregator and derive_health_status
"""
