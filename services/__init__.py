"""
服務層

這個 package 包含純計算邏輯，不負責狀態轉換：
- ScoreValidator：輸入驗證與回合總和檢查
- ScoringService：回合總和、合法性與總分
- RoundPhaseService：回合可編輯 / 凍結判斷
- NamingService：預設名稱與名稱名單整理
"""
