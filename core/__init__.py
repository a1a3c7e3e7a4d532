"""
核心業務邏輯層

這個 package 包含所有核心業務邏輯，包括：
- Score Model：RoundScore 與 Player
- ScoreboardManager：集中管理所有狀態變更
- GameDataStore：名稱與遊戲狀態的持久化
- AutoSaver：延遲寫入
"""
