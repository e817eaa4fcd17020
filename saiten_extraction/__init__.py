"""
Stage 1: per-session metric extraction, one module per dialect.

  technique_extractor  seimitsu: technique counts, DIO/SPR/Bonus, sensitivity
  scoring_extractor    ysai: four-phase breakdown, common indicators
"""
